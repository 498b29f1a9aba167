"""Transport layer for the Brother CNC command protocol."""

from .tcp_client import BrotherRequestClient, build_request

__all__ = ["BrotherRequestClient", "build_request"]
