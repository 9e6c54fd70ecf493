from .constants import ACTION_OPEN, ACTION_TERMINATE, MODE_BROWSE, MODE_SEARCH, VERSION
from .errors import AppctlError, EnumerationFailed, TerminalUnavailable
from .fuzzy import Candidate
from .picker import run_picker
from .session import configure_logging, dispatch, run_session
from .state import Outcome

__version__ = VERSION
