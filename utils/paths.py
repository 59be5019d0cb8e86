from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]


def project_path(*parts):
    """Path under the project root"""
    return PROJECT_ROOT.joinpath(*parts)


def resolve_path(path, root=None):

    path = Path(path).expanduser()

    if path.is_absolute():
        return path

    return Path(root or PROJECT_ROOT) / path
