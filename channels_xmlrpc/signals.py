"""Django signals for XML-RPC method execution.

Signals
-------
xmlrpc_method_started
    Sent when a remote method starts executing.
xmlrpc_method_completed
    Sent when a remote method returns (including a returned or raised Fault).
xmlrpc_method_failed
    Sent when a remote method raises any other error.

Examples
--------
Collect timings::

    from channels_xmlrpc.signals import xmlrpc_method_completed

    def on_completed(sender, method_name, duration, **kwargs):
        statsd.timing(f"xmlrpc.{method_name}", duration * 1000)

    xmlrpc_method_completed.connect(on_completed)

Notes
-----
Signals are sent synchronously in the thread executing the remote method.
Keep receivers lightweight.
"""

from __future__ import annotations

from django.dispatch import Signal

xmlrpc_method_started = Signal()
"""Sent when a remote method starts executing.

Arguments:
    sender: The consumer class
    consumer: The consumer instance
    method_name (str): Name of the remote method
    args (list): Positional arguments
"""

xmlrpc_method_completed = Signal()
"""Sent when a remote method returns.

Arguments:
    sender: The consumer class
    consumer: The consumer instance
    method_name (str): Name of the remote method
    result: The method's return value
    duration (float): Execution time in seconds
"""

xmlrpc_method_failed = Signal()
"""Sent when a remote method raises an error.

Arguments:
    sender: The consumer class
    consumer: The consumer instance
    method_name (str): Name of the remote method
    error (Exception): The exception that was raised
    duration (float): Time before failure in seconds
"""

__all__ = [
    "xmlrpc_method_completed",
    "xmlrpc_method_failed",
    "xmlrpc_method_started",
]
