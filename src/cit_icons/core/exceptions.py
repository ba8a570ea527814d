"""项目内使用的自定义异常定义。"""


class CitIconsError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(CitIconsError):
    """配置不合法时抛出。"""


class OutputSetupError(CitIconsError):
    """输出目录无法清理或创建时抛出，属于致命错误。"""
