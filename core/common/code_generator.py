import random
import string

from django.utils import timezone


class CodeGenerator:
    @classmethod
    def generate_code(cls, length=7, include_alpha=False):
        if include_alpha:
            chars = string.ascii_uppercase + string.digits
        else:
            chars = string.digits
        return "".join(random.choice(chars) for _ in range(length))

    @classmethod
    def timestamp_token(cls):
        """Milliseconds since the epoch."""
        return int(timezone.now().timestamp() * 1000)

    @classmethod
    def task_id(cls, *parts):
        """Build a task reference such as AUTO-PPM-AST001-1718000000000."""
        return "-".join([*(str(part) for part in parts), str(cls.timestamp_token())])

    @classmethod
    def log_id(cls):
        """Build a log reference such as LOG-20240315-000123."""
        today = timezone.localdate().strftime("%Y%m%d")
        return f"LOG-{today}-{str(cls.timestamp_token())[-6:]}"
