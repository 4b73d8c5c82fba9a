VERSION = "0.1.0"

# API接口前缀
API_BASE = "/api/v1"
