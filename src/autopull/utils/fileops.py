"""文件清理工具."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def delete_files_by_pattern(
    target_dir: str | Path,
    pattern: str,
    recursive: bool = False,
) -> list[Path]:
    """
    删除目标目录下匹配模式的文件.

    Args:
        target_dir: 目标目录
        pattern: 文件名或通配符，如 "*.log"
        recursive: 是否同时匹配子目录中的文件

    Returns:
        list[Path]: 已删除的文件
    """
    root = Path(target_dir)
    matches = root.rglob(pattern) if recursive else root.glob(pattern)

    deleted: list[Path] = []
    for path in sorted(matches):
        if not path.is_file():
            continue
        try:
            path.unlink()
            deleted.append(path)
        except OSError as e:
            logger.error(f"无法删除文件: {path} - {e}")

    logger.info(f"成功删除了 {len(deleted)} 个文件")
    return deleted


def delete_empty_dirs(target_dir: str | Path, recursive: bool = False) -> list[Path]:
    """
    删除空文件夹.

    target_dir 本身为空时也会被删除。recursive 为 True 时自底向上清理子目录，
    清理后 target_dir 变空则一并删除。不跟随符号链接。

    Returns:
        list[Path]: 已删除的目录
    """
    deleted: list[Path] = []

    def remove(directory: Path) -> None:
        try:
            directory.rmdir()
            deleted.append(directory)
            logger.info(f"删除空文件夹: {directory}")
        except OSError as e:
            logger.error(f"无法删除空文件夹: {directory} - {e}")

    def walk(directory: Path) -> None:
        if not any(directory.iterdir()):
            remove(directory)
            return
        if not recursive:
            return

        for child in sorted(directory.iterdir()):
            if child.is_dir() and not child.is_symlink():
                walk(child)

        if not any(directory.iterdir()):
            remove(directory)

    walk(Path(target_dir))
    logger.info(f"成功删除了 {len(deleted)} 个空文件夹")
    return deleted
