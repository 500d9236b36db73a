"""Top-level package for the document toolkit.

Provides subpackages:
- doc_toolkit.core – document and geometry models, error hierarchy
- doc_toolkit.store – in-memory document store
- doc_toolkit.editor – editor session state, toolbar and table helpers
- doc_toolkit.export – rasterize, slice and paginate documents to PDF
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("doc-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
