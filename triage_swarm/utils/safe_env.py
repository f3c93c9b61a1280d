"""Environment filtering for investigator and evaluator subprocesses.

The CLIs only need their provider credentials, their own settings and the
usual runtime paths. Everything else in the caller's environment, notably
database passwords and cloud credentials, is withheld from them.
"""

import os
from typing import Mapping, Optional

# Credentials that never reach a CLI, even under an allowed prefix.
BLOCKED_VARS: frozenset[str] = frozenset(
    {
        "DATABASE_URL",
        "DATABASE_PASSWORD",
        "DB_PASSWORD",
        "DB_PASS",
        "PGPASSWORD",
        "MYSQL_PWD",
        "MONGO_PASSWORD",
        "REDIS_PASSWORD",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
        "AZURE_CLIENT_SECRET",
        "AZURE_TENANT_ID",
        "GCP_SERVICE_ACCOUNT_KEY",
        "GOOGLE_APPLICATION_CREDENTIALS_JSON",
        "SECRET_KEY",
        "PRIVATE_KEY",
        "ENCRYPTION_KEY",
        "JWT_SECRET",
        "SESSION_SECRET",
        "COOKIE_SECRET",
    }
)

# Credentials and settings read by the claude, gemini and codex CLIs.
PROVIDER_PREFIXES: tuple[str, ...] = (
    "ANTHROPIC_",
    "CLAUDE_",
    "GEMINI_",
    "GOOGLE_",
    "OPENAI_",
    "CODEX_",
)

# Needed to locate the binaries and their home, locale and proxy settings.
RUNTIME_VARS: frozenset[str] = frozenset(
    {
        "PATH",
        "HOME",
        "USER",
        "SHELL",
        "LANG",
        "LC_ALL",
        "LC_CTYPE",
        "TMPDIR",
        "TMP",
        "TEMP",
        "SYSTEMROOT",
        "LD_LIBRARY_PATH",
        "XDG_RUNTIME_DIR",
        "XDG_CONFIG_HOME",
        "XDG_DATA_HOME",
        "VIRTUAL_ENV",
        "CONDA_PREFIX",
        "PYTHONPATH",
        "NODE_PATH",
        "NODE_EXTRA_CA_CERTS",
        "HTTP_PROXY",
        "HTTPS_PROXY",
        "NO_PROXY",
    }
)


def is_passed_through(key: str) -> bool:
    """Whether a variable of the caller's environment reaches the CLIs."""
    if key in BLOCKED_VARS:
        return False
    if key in RUNTIME_VARS:
        return True
    return key.startswith(PROVIDER_PREFIXES)


def agent_env(
    extra: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Build the environment for a CLI subprocess.

    Args:
        extra: Variables to add on top (blocked names are still dropped)
        base: Environment to filter (default: os.environ)

    Returns:
        Filtered environment with ``TERM=dumb`` so captured output carries
        no terminal control sequences
    """
    source = os.environ if base is None else base
    env = {key: value for key, value in source.items() if is_passed_through(key)}
    env["TERM"] = "dumb"

    if extra:
        env.update({key: value for key, value in extra.items() if key not in BLOCKED_VARS})

    return env
