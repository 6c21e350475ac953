"""统一异常体系

所有业务异常继承 TreeVendorError，内部组件只抛异常不退出进程，
由 CLI 层统一决定退出码和提示。
"""

from __future__ import annotations


class TreeVendorError(Exception):
    """基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(TreeVendorError):
    """工作区配置缺失或内容无效（GOPATH 未设置、标记文件缺失等）"""

    code = "CONFIG_ERROR"


class ValidationError(TreeVendorError):
    """输入参数校验失败"""

    code = "VALIDATION_ERROR"


class ExecutionError(TreeVendorError):
    """git 等外部命令执行失败"""

    code = "EXECUTION_ERROR"


class DependencyError(TreeVendorError):
    """依赖枚举 (go list) 或单包拉取 (go get) 失败"""

    code = "DEPENDENCY_ERROR"
