import logging

from config.env import env

TG_BOT_TOKEN: str = env.str("TG_BOT_TOKEN", default="")
TG_BOT_NAME: str = env.str("TG_BOT_NAME", default="RichTextPreview")

# Expand [label](target) shorthands before the markdown pass
FORMAT_MARKDOWN_LINKS: bool = env.bool("FORMAT_MARKDOWN_LINKS", default=True)
# Treat incoming text as final markup
FORMAT_SKIP_MARKDOWN: bool = env.bool("FORMAT_SKIP_MARKDOWN", default=False)
MAX_MESSAGE_LENGTH: int = env.int("MAX_MESSAGE_LENGTH", default=4096)

LOG_LEVEL: str = env.str("LOG_LEVEL", default="INFO")
DEBUG: bool = env.bool("DEBUG", default=False)
if DEBUG:
    LOG_LEVEL = "DEBUG"

# Enable logging
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=LOG_LEVEL)
# set higher logging level for httpx to avoid all GET and POST requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)

LOGGER = logging.getLogger(__name__)
