"""Faultwarden delivery routing — dispatches fault records to configured sinks.

Sinks are pluggable destinations: the diagnostic stream (``ConsoleSink``),
an HTTP collector (``RemoteSink``), or any object implementing the
``BaseSink`` protocol.
"""
