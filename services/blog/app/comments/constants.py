COMMENT_MAX_LENGTH: int = 500
