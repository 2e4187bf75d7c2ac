"""
统一异常体系

抽取引擎对“模型输出格式不规范”从不抛异常（返回空结果、None 或违规列表），
这里定义的异常只用于调用方传参错误、解析配置错误以及内部不变量被破坏这类
编程错误，调用方不应把它们当作可恢复的业务状态处理。
"""

from typing import Optional


class ExtractionException(Exception):
    """
    抽取引擎基础异常类

    Attributes:
        message: 错误消息（面向调用方）
        detail: 详细错误信息（可选，用于日志）
    """

    def __init__(self, message: str, detail: Optional[str] = None):
        self.message = message
        self.detail = detail or message
        super().__init__(self.message)


class InvalidParameterError(ExtractionException):
    """参数错误，例如不支持的内容类型"""

    def __init__(self, message: str, parameter: Optional[str] = None):
        detail = f"参数错误: {parameter} - {message}" if parameter else message
        super().__init__(message=message, detail=detail)


class ExtractionConfigError(ExtractionException):
    """解析配置错误（空的别名组、无法编译的正则等）"""

    def __init__(self, message: str):
        super().__init__(
            message="解析配置错误",
            detail=message,
        )


class ParserInvariantError(ExtractionException):
    """解析器内部不变量被破坏，属于程序缺陷"""

    def __init__(self, message: str):
        super().__init__(
            message="解析器内部错误",
            detail=message,
        )

