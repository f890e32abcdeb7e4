import logging

from .sysutils import get_memory_usage


class MemoryLogger(logging.Logger):
    """Logger that can append system memory usage to info messages.

    Extends the standard logging.Logger. Useful when linking long
    acquisitions with many detections per frame.
    """

    def info(self, msg: str, *args, show_memory: bool = False, **kwargs) -> None:
        """Log info message with optional memory usage details.

        Args:
            msg: The message to log
            *args: Arguments merged into msg, as for Logger.info
            show_memory: Include system memory usage if True
            **kwargs: Additional keyword arguments for Logger
        """
        message = msg

        if show_memory:
            try:
                ram_used = get_memory_usage(free=False, unit="GB", as_string=False)
                ram_free = get_memory_usage(free=True, unit="GB", as_string=False)
                message += f" | RAM: {ram_used:.2f} GB used / {ram_free:.2f} GB free"
            except Exception as e:
                message += f" | RAM: Error ({e})"

        super().info(message, *args, **kwargs)
