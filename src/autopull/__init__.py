"""autopull - 批量同步 GitHub/Gitee 用户仓库."""

__version__ = "0.1.0"
