"""领域错误定义。

除图片删除失败外，所有后端失败都以下列错误向上传递，由调用方决定如何展示。
"""

ERROR_MESSAGES = {
    "ARTICLE_CREATE_FAILED": "Failed to create article",
    "ARTICLE_UPDATE_FAILED": "Failed to update article",
    "ARTICLE_DELETE_FAILED": "Failed to delete article",
    "ARTICLE_FETCH_FAILED": "Failed to load articles",
    "IMAGE_UPLOAD_FAILED": "Failed to upload image",
    "AUTH_REQUIRED": "User must be authenticated to create articles",
    "GENERIC_ERROR": "Something went wrong. Please try again.",
}


class BoardError(Exception):
    """错误基类，message 为可直接展示的原因"""

    default_message = ERROR_MESSAGES["GENERIC_ERROR"]

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigError(BoardError):
    """必需配置缺失"""


class AuthError(BoardError):
    """凭据或会话被后端拒绝"""

    default_message = ERROR_MESSAGES["AUTH_REQUIRED"]


class FetchError(BoardError):
    default_message = ERROR_MESSAGES["ARTICLE_FETCH_FAILED"]


class UploadError(BoardError):
    """图片上传失败，创建流程随之中止"""

    default_message = ERROR_MESSAGES["IMAGE_UPLOAD_FAILED"]


class CreateError(BoardError):
    default_message = ERROR_MESSAGES["ARTICLE_CREATE_FAILED"]


class UpdateError(BoardError):
    default_message = ERROR_MESSAGES["ARTICLE_UPDATE_FAILED"]


class NotFoundError(BoardError):
    """更新或删除的目标记录不存在"""

    default_message = "Article not found"


class DeleteError(BoardError):
    default_message = ERROR_MESSAGES["ARTICLE_DELETE_FAILED"]
