"""
The Supervisor package.
Manages the lifecycle of the Selenium server process.

This package contains the `ServerSupervisor` class and its helper modules,
which together build the server's command line, spawn it, relay shutdown
requests and propagate its exit code.
"""
from .supervisor import ServerSupervisor, SupervisorState

__all__ = ['ServerSupervisor', 'SupervisorState']
