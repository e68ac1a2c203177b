"""
excludejar - remove the entries of one JAR from another
"""

from .cleanup import cleanup
from .context import Console, ExcludeJarOptions
from .errors import ArchiveOperationError, CleanupError, ConfigurationError, ExcludeJarError
from .exclusion import build_exclusion_list, parse_exclusion_list, read_exclusion_entries
from .repackage import repackage
from .task import ExcludeJarTask, RunResult
from .workspace import default_workspace_path, resolve_workspace
