"""
End-to-end tests for ExcludeJarTask.
"""

import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest.mock import MagicMock, patch

from excludejar.src.context import Console, ExcludeJarOptions
from excludejar.src.errors import ArchiveOperationError, CleanupError
from excludejar.src.task import ExcludeJarTask
from excludejar.tests.helpers import jar_files, write_jar


class TestExcludeJarTask(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.console = MagicMock(spec=Console)
        self.console.dry_run = False
        self.base = write_jar(
            self.root / "base.jar",
            [
                "META-INF/MANIFEST.MF",
                "lib/Keep.class",
                "lib/Drop.class",
                "lib/drop.properties",
            ],
        )
        self.exclude = write_jar(
            self.root / "exclude.jar",
            [
                "META-INF/",
                "META-INF/MANIFEST.MF",
                "lib/",
                "lib/Drop.class",
                "lib/drop.properties",
            ],
        )
        self.dest = self.root / "dest.jar"

    def tearDown(self):
        self.temp_dir.cleanup()

    def _task(self, **overrides):
        values = dict(
            dest_file=self.dest,
            base_file=self.base,
            exclude_file=self.exclude,
            work_dir=self.root / "work",
        )
        values.update(overrides)
        return ExcludeJarTask(ExcludeJarOptions(**values), console=self.console)

    def test_excluded_entries_absent(self):
        result = self._task().execute()

        self.assertEqual(result.exclude_list, "lib/Drop.class,lib/drop.properties")
        self.assertEqual(
            jar_files(self.dest), {"META-INF/MANIFEST.MF", "lib/Keep.class"})
        # Base archive untouched.
        self.assertEqual(len(jar_files(self.base)), 4)
        self.console.info.assert_any_call(
            "Exclude list from exclude.jar: [lib/Drop.class,lib/drop.properties]")

    def test_empty_exclusion_keeps_every_entry(self):
        base = self.root / "full.jar"
        entries = ["META-INF/", "META-INF/MANIFEST.MF", "com/", "com/A.class"]
        with zipfile.ZipFile(base, "w") as archive:
            for name in entries:
                info = zipfile.ZipInfo(name, date_time=(2001, 2, 3, 4, 5, 6))
                archive.writestr(info, b"" if name.endswith("/") else name.encode())
        empty = write_jar(self.root / "empty.jar", [])

        self._task(base_file=base, exclude_file=empty, autoclean=True).execute()

        with zipfile.ZipFile(self.dest) as archive:
            dates = {info.filename: info.date_time for info in archive.infolist()}
        self.assertEqual(sorted(dates), sorted(entries))
        self.assertEqual(set(dates.values()), {(2001, 2, 3, 4, 5, 6)})

    def test_workspace_kept_without_autoclean(self):
        result = self._task().execute()

        self.assertFalse(result.cleaned)
        self.assertEqual(result.workspace, self.root / "work")
        self.assertTrue((result.workspace / "lib" / "Keep.class").is_file())
        self.assertFalse((result.workspace / "lib" / "Drop.class").exists())

    def test_autoclean_removes_workspace(self):
        result = self._task(autoclean=True).execute()

        self.assertTrue(result.cleaned)
        self.assertFalse(result.workspace.exists())
        self.assertTrue(self.dest.is_file())

    def test_workspace_path_is_regular_file(self):
        blocker = self.root / "blocker"
        blocker.write_text("x")

        result = self._task(work_dir=blocker, autoclean=True).execute()

        self.assertNotEqual(result.workspace, blocker)
        self.assertEqual(jar_files(self.dest), {"META-INF/MANIFEST.MF", "lib/Keep.class"})

    def test_default_workspace_when_unset(self):
        result = self._task(work_dir=None, autoclean=True).execute()
        self.assertTrue(result.workspace.name.startswith("excludejar.ExcludeJar."))
        self.assertFalse(result.workspace.exists())

    def test_missing_base_archive(self):
        missing = self.root / "missing.jar"
        with self.assertRaises(ArchiveOperationError) as ctx:
            self._task(base_file=missing, autoclean=True).execute()

        message = str(ctx.exception)
        self.assertTrue(message.startswith("File IO Error: "))
        self.assertIn("missing.jar", message)
        self.assertIsInstance(ctx.exception.__cause__, FileNotFoundError)
        self.assertIs(ctx.exception.cause, ctx.exception.__cause__)
        self.assertFalse(self.dest.exists())
        # Workspace was created for the run and still cleaned up.
        self.assertFalse((self.root / "work").exists())

    def test_unreadable_exclusion_archive(self):
        bad = self.root / "bad.jar"
        bad.write_bytes(b"garbage")
        with self.assertRaises(ArchiveOperationError) as ctx:
            self._task(exclude_file=bad).execute()
        self.assertIsInstance(ctx.exception.__cause__, OSError)
        self.assertFalse(self.dest.exists())

    @patch("excludejar.src.task.cleanup")
    def test_cleanup_failure_does_not_mask_error(self, mock_cleanup):
        mock_cleanup.side_effect = CleanupError("cannot delete")

        with self.assertRaises(ArchiveOperationError):
            self._task(base_file=self.root / "missing.jar", autoclean=True).execute()

        self.console.error.assert_called_once_with("cannot delete")

    @patch("excludejar.src.task.cleanup")
    def test_cleanup_failure_after_success_raises(self, mock_cleanup):
        mock_cleanup.side_effect = CleanupError("cannot delete")

        with self.assertRaises(CleanupError):
            self._task(autoclean=True).execute()

        self.assertTrue(self.dest.is_file())

    def test_dry_run_writes_nothing(self):
        self.console.dry_run = True

        result = self._task(autoclean=True).execute()

        self.assertEqual(result.exclude_list, "lib/Drop.class,lib/drop.properties")
        self.assertFalse(self.dest.exists())
        self.assertFalse((self.root / "work").exists())
        self.assertFalse(result.cleaned)


if __name__ == "__main__":
    unittest.main()
