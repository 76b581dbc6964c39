import unittest
from pathlib import Path


class TestBackendLayout(unittest.TestCase):
    def test_backend_code_is_scoped_under_backend_dir(self) -> None:
        repo_root = Path(__file__).resolve().parents[1]

        # Guard-rail: package code should not drift back to repo root.
        banned_root_dirs = [
            "filmfinder",
            "domain",
            "application",
            "infrastructure",
            "cli",
        ]
        found = [name for name in banned_root_dirs if (repo_root / name).exists()]
        self.assertFalse(
            found,
            msg=(
                "Packages must live under `backend/filmfinder/`. "
                f"Found unexpected root-level directories: {found}"
            ),
        )

    def test_every_package_dir_has_init(self) -> None:
        package_root = Path(__file__).resolve().parents[1] / "backend" / "filmfinder"
        missing = [
            str(d.relative_to(package_root))
            for d in [package_root, *package_root.rglob("*")]
            if d.is_dir() and d.name != "__pycache__" and any(d.glob("*.py")) and not (d / "__init__.py").exists()
        ]
        self.assertFalse(missing, msg=f"Missing __init__.py in: {missing}")


if __name__ == "__main__":
    unittest.main()
