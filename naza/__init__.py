"""Byte order, bit streams, queues, caches, hash rings, rate meters, crypto, charts, sockets and file tools."""

__version__ = "0.1.0"