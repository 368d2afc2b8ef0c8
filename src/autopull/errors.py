"""异常定义."""


class AutopullError(Exception):
    """autopull 基础异常."""


class ConfigError(AutopullError):
    """配置错误（缺少凭证、平台不支持等），在任何网络请求之前抛出."""


class FetchError(AutopullError):
    """拉取仓库列表失败，整次同步中止."""
