"""Names and messages shared by the server."""

from datetime import timedelta

# query and path parameters
QUERY_PARAM_Q = "q"
QUERY_BY_LABELS_CON = "&"
QUERY_PARAM_WAIT = "wait"
QUERY_PARAM_REV = "revision"
QUERY_PARAM_MATCH = "match"
QUERY_PARAM_KEY = "key"
QUERY_PARAM_LABEL = "label"
QUERY_PARAM_STATUS = "status"
QUERY_PARAM_OFFSET = "offset"
QUERY_PARAM_LIMIT = "limit"
PATH_PARAM_KV_ID = "kv_id"
PATH_PARAMETER_PROJECT = "project"
QUERY_PARAM_SESSION_ID = "sessionId"
QUERY_PARAM_SESSION_GROUP = "sessionGroup"
QUERY_PARAM_IP = "ip"
QUERY_PARAM_URL_PATH = "urlPath"
QUERY_PARAM_USER_AGENT = "userAgent"
QUERY_PARAM_OVERRIDE = "override"

# http headers
HEADER_DEPTH = "X-Depth"
HEADER_REVISION = "X-Kie-Revision"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_ACCEPT = "Accept"

# content types
CONTENT_TYPE_TEXT = "application/text"
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_YAML = "text/yaml"

# server
PATTERN_EXACT = "exact"
STATUS_ENABLED = "enabled"
STATUS_DISABLED = "disabled"
MSG_DOMAIN_MUST_NOT_BE_EMPTY = "domain must not be empty"
MSG_DELETE_KV_FAILED = "delete kv failed"
MSG_ILLEGAL_LABELS = (
    "label value can not be empty, "
    "label can not be duplicated, please check query parameters"
)
MSG_ILLEGAL_DEPTH = "X-Depth must be number"
MSG_INVALID_WAIT = (
    "wait param should be formed with number and time unit like 5s,100ms, "
    "and less than 5m"
)
MSG_INVALID_REV = "revision param should be formed with number greater than 0"
RESP_BODY_CONTEXT_KEY = "responseBody"

MAX_WAIT = timedelta(minutes=5)

MSG_DB_ERROR = "database operation error"