"""
The excludejar run: resolve workspace, compute exclusions, repackage, clean up.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from core.archive import ArchiveManager

from .cleanup import cleanup
from .context import Console, ExcludeJarOptions
from .errors import ArchiveOperationError, CleanupError
from .exclusion import build_exclusion_list
from .repackage import repackage
from .workspace import resolve_workspace


@dataclass
class RunResult:
    destination: Path
    workspace: Path
    exclude_list: str
    cleaned: bool = False


class ExcludeJarTask:
    """Remove the entries of one JAR from another and write the result."""

    def __init__(
        self,
        options: ExcludeJarOptions,
        *,
        console: Optional[Console] = None,
        archives: Optional[ArchiveManager] = None,
    ):
        self.options = options
        self.console = console or Console()
        self.archives = archives or ArchiveManager(self.console)

    def execute(self) -> RunResult:
        """Run the task once.

        Every failure of the exclusion list, extraction or packaging step is
        raised as :class:`ArchiveOperationError` chained to its cause. When
        ``autoclean`` is set the workspace is removed on every exit path; a
        cleanup failure after an earlier error is only reported.
        """
        opts = self.options
        workspace: Optional[Path] = None
        cleaned = False
        failed = False
        try:
            workspace = resolve_workspace(opts.work_dir, console=self.console)
            self.console.info(f"Creating work directory {workspace.resolve()}")

            exclude_list = build_exclusion_list(opts.exclude_file)
            self.console.info(
                f"Exclude list from {opts.exclude_file.name}: [{exclude_list}]")

            repackage(
                opts.base_file,
                exclude_list,
                workspace,
                opts.dest_file,
                archives=self.archives,
                console=self.console,
                manifest=opts.manifest,
            )
        except Exception as exc:
            failed = True
            raise ArchiveOperationError(exc) from exc
        finally:
            if workspace is not None:
                try:
                    cleaned = cleanup(workspace, opts.autoclean, console=self.console)
                except CleanupError as exc:
                    if not failed:
                        raise
                    self.console.error(str(exc))

        return RunResult(
            destination=opts.dest_file,
            workspace=workspace,
            exclude_list=exclude_list,
            cleaned=cleaned,
        )
