"""Lightwire application bootstrapping.

Lightwire builds an application's object graph from a declarative JSON
description of named components. Each component names a constructor and a
list of arguments, where an argument written as ``@name`` refers to another
component. The graph is resolved once at startup, every component is built
exactly once, and control passes to a single entry point: a request handler
in application mode, or a command in command mode.

Basic Usage:
    >>> from lightwire.bootstrap import Bootstrap
    >>> from lightwire.configuration import ConfigurationLoader
    >>>
    >>> bootstrap = Bootstrap(ConfigurationLoader("config"))
    >>> bootstrap.run(router)                 # application mode
    >>> bootstrap.run_command("cleanup")      # command mode

The framework consists of several core modules:
    - configuration: Loading of parameters, settings and the raw graph
    - placeholders: Substitution of ``%parameter%`` and routing tokens
    - analysis: Construction order computation
    - factory: Instantiation of components along a construction plan
    - registry: Lookup of constructors by type identifier
    - bootstrap: Application and command mode orchestration
    - errors: Framework-specific exceptions
"""
