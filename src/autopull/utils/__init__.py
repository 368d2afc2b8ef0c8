"""工具函数."""

from autopull.utils.fileops import delete_empty_dirs, delete_files_by_pattern

__all__ = [
    "delete_empty_dirs",
    "delete_files_by_pattern",
]
