"""错误类型

只有上传超限、导入格式错误和资源名缺失会展示给用户；
传输失败在 ConfigStore 边界被吞掉并转成空配置。
"""


class SkinnerError(Exception):
    """皮肤管理相关错误的基类"""


class TransportFailure(SkinnerError):
    """网络不可用或未认证"""


class AssetTooLarge(SkinnerError):
    """上传的资源超过大小上限"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"文件过大 ({size / 1024:.1f}KB)，请保持在 {limit // 1024}KB 以内"
        )


class InvalidImportFormat(SkinnerError):
    """导入的配置文件无法解析"""


class InvalidAsset(SkinnerError):
    """资源缺少名称"""


class UpdateInProgress(SkinnerError):
    """上一次修改尚未完成"""
