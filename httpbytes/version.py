VERSION = "1.0.0"
HTTPBYTES = "httpbytes " + VERSION
