"""常量定义：集中维护 HTTP 状态码与默认业务值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_UNPROCESSABLE_ENTITY = 422
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 500
