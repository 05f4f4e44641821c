# h2oGPTe Action Utilities
# Re-exports for convenient imports from utils package
from .cleaning import clean  # noqa: F401
from .comment_formatter import build_agent_reply  # noqa: F401
from .comment_formatter import build_agent_response  # noqa: F401
from .comment_formatter import create_initial_working_comment  # noqa: F401
from .config import ActionConfig, load_action_config  # noqa: F401
from .exceptions import ConfigurationError  # noqa: F401
from .github_client import get_github_client, get_issue, get_repo  # noqa: F401
from .slash_commands import SlashCommand  # noqa: F401
from .slash_commands import match_slash_commands  # noqa: F401
from .slash_commands import parse_slash_commands  # noqa: F401
from .transcript import extract_final_agent_response  # noqa: F401
from .url_replace import replace_attachment_urls  # noqa: F401
