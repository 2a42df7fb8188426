"""Session persistence.

The session carries the only engine-relevant settings that survive a
restart: the sort key and hidden-file visibility. A missing or broken
session file never prevents startup; defaults are used instead.
"""

import logging
import tomllib
from pathlib import Path

import tomli_w
from pydantic import BaseModel, ConfigDict, ValidationError

from filemanip.core.paths import get_session_path
from filemanip.filesystem.models import SortKey

logger = logging.getLogger(__name__)


class Session(BaseModel):
    """Persisted listing preferences.

    Attributes:
        sort_by: Sort key for directory snapshots.
        show_hidden: Whether dot-files are listed.
    """

    model_config = ConfigDict(extra="ignore")

    sort_by: SortKey = SortKey.NAME
    show_hidden: bool = True


def load_session(path: Path | None = None) -> Session:
    """Read the session file.

    Args:
        path: Session file. Defaults to get_session_path().

    Returns:
        Stored Session, or a default Session if the file is missing or invalid.
    """
    session_path = path or get_session_path()
    try:
        with open(session_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Session()
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable session file %s: %s", session_path, e)
        return Session()

    try:
        return Session.model_validate(data)
    except ValidationError as e:
        logger.warning("Ignoring invalid session file %s: %s", session_path, e)
        return Session()


def save_session(session: Session, path: Path | None = None) -> Path:
    """Write the session file, creating its directory if needed.

    Raises:
        OSError: If the file cannot be written.
    """
    session_path = path or get_session_path()
    session_path.parent.mkdir(parents=True, exist_ok=True)
    data = {"sort_by": session.sort_by.value, "show_hidden": session.show_hidden}
    with open(session_path, "wb") as f:
        tomli_w.dump(data, f)
    return session_path
