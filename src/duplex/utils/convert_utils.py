"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Binary (1024-based) size parsing for the -s/-b filters and size formatting for reports.
"""
import re

_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB")

# 'K' and 'KB' both mean 1024; the trailing B is optional on every prefix
_MULTIPLIERS = {unit[0] if unit != "B" else "": 1024 ** power for power, unit in enumerate(_UNITS)}

_SIZE_RE = re.compile(r"^(?P<sign>-?)(?P<number>\d+(?:\.\d+)?|\.\d+)\s*(?P<prefix>[KMGTPE]?)B?$")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """Largest unit that keeps the value under 1024, two decimals: 1536 -> '1.50KB'."""
        if size_bytes < 0:
            return "0B"
        value = float(size_bytes)
        index = 0
        while value >= 1024 and index < len(_UNITS) - 1:
            value /= 1024
            index += 1
        return f"{value:.2f}{_UNITS[index]}"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Parses sizes such as '1000', '1.5GB', '2048KB' or '1K' (case-insensitive).
        Raises ValueError for negative sizes or anything else that is not a size.
        """
        text = size_str.strip().upper()
        match = _SIZE_RE.match(text)
        if not match:
            raise ValueError(
                f"Invalid size format: '{text}'. "
                f"Supported formats: 1.5GB, 2048KB, 1000, 1K, 1M, etc."
            )
        if match.group("sign"):
            raise ValueError(f"Negative size not allowed: '{text}'")
        return int(float(match.group("number")) * _MULTIPLIERS[match.group("prefix")])

    @staticmethod
    def format_count(value: int, width: int = 14) -> str:
        """Right-aligned integer with thousands separators, e.g. '         1,024'."""
        return f"{value:>{width},}"

    @staticmethod
    def percent(part: int, whole: int) -> float:
        if not whole:
            return 0.0
        return part / whole * 100
