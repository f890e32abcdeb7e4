import os
import platform
import sys
from typing import Union

# Third-party imports
import psutil


def get_memory_usage(
    free: bool = False,
    unit: str = "MB",
    as_string: bool = False,
) -> Union[float, str]:
    """
    Get the system memory usage.

    Args:
        free (bool): If True, return available memory. If False, return used memory. Defaults to False.
        unit (str): Unit for memory measurement. Either 'MB' or 'GB'. Defaults to 'MB'.
        as_string (bool): If True, returns formatted string with units. If False, returns float. Defaults to False.

    Returns:
        Union[float, str]: Memory usage in specified units, either as float or formatted string.
    """
    if unit not in ["MB", "GB"]:
        raise ValueError("Unit must be either 'MB' or 'GB'")

    divisor = 1024 * 1024 if unit == "MB" else 1024 * 1024 * 1024

    system_memory = psutil.virtual_memory()
    memory_value = system_memory.available / divisor if free else system_memory.used / divisor

    return f"{memory_value:.2f} {unit}" if as_string else memory_value


def get_system_info() -> str:
    """
    Get system information including CPU and memory usage.

    Returns:
        str: Formatted string containing system information.
    """
    cpu_percent = psutil.cpu_percent()
    memory = psutil.virtual_memory()
    mem_percent = memory.used / memory.total * 100

    info = f"System Information:\n"
    info += f"OS: {platform.system()} {platform.release()}\n"
    info += f"Python: {platform.python_version()} ({sys.executable})\n"
    info += f"CPU Model: {platform.processor()}\n"
    info += f"CPU Cores: {os.cpu_count()}\n"
    info += f"CPU Usage: {cpu_percent}%\n"
    info += f"Memory: {mem_percent:.2f}% used ({memory.used / (1024**3):.2f}GB / {memory.total / (1024**3):.2f}GB)\n"
    return info
