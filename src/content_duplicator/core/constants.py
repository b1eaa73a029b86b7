"""
Constants used throughout the content_duplicator package.
"""

# Record and link discriminators used in `sys.type` / `sys.linkType`
ENTRY_TYPE = "Entry"
ASSET_TYPE = "Asset"
LINK_TYPE = "Link"
ARRAY_TYPE = "Array"

# Fields whose values are rewritten with the naming rules
FIELD_NAME = "name"
FIELD_TITLE = "title"
FIELD_SLUG = "slug"

# Asset file field and the keys inside each locale value
FIELD_FILE = "file"
FILE_URL = "url"
FILE_UPLOAD = "upload"
FILE_DETAILS = "details"

# Scheme prepended to protocol-relative asset urls when re-uploading
UPLOAD_SCHEME = "https:"

# Content Management API
DEFAULT_API_URL = "https://api.contentful.com"
MANAGEMENT_MEDIA_TYPE = "application/vnd.contentful.management.v1+json"
DEFAULT_ENVIRONMENT = "master"
TOKEN_ENV_VAR = "CONTENTFUL_MANAGEMENT_TOKEN"
CONTENT_TYPE_PAGE_LIMIT = 1000
