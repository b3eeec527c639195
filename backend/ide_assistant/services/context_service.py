import json
from datetime import datetime, timezone

from ide_assistant.logging_config import get_logger
from ide_assistant.schemas.context import FileSnapshot, FileStructure, FileStructureEntry, ProjectContext
from ide_assistant.services.project_store import ProjectStore

logger = get_logger(__name__)

FILE_TYPE_MAP = {
    "js": "javascript",
    "ts": "typescript",
    "jsx": "react",
    "tsx": "react-typescript",
    "css": "stylesheet",
    "html": "markup",
    "json": "configuration",
    "md": "documentation",
}

ISSUE_MARKER = "console.error"
_SCANNED_LANGUAGES = {"javascript", "typescript"}


class ProjectNotFoundError(LookupError):
    def __init__(self, project_id: int):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


def get_file_type(filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return FILE_TYPE_MAP.get(ext, "text")


def build_file_structure(files: list[FileSnapshot]) -> FileStructure:
    structure = FileStructure()
    for f in files:
        if f.is_directory:
            structure.directories.append(f.path)
        else:
            structure.files[f.path] = FileStructureEntry(
                type=get_file_type(f.name),
                language=f.language or "text",
                size=len(f.content or ""),
                last_modified=f.updated_at or datetime.now(timezone.utc),
            )
    return structure


def extract_dependencies(files: list[FileSnapshot]) -> list[str]:
    """Collect dependency names from every file literally named package.json."""
    deps: dict[str, None] = {}
    for f in files:
        if f.name != "package.json" or not f.content:
            continue
        try:
            manifest = json.loads(f.content)
        except json.JSONDecodeError:
            logger.debug("Ignoring unparseable manifest %s", f.path)
            continue
        if not isinstance(manifest, dict):
            continue
        for key in ("dependencies", "devDependencies"):
            section = manifest.get(key)
            if isinstance(section, dict):
                deps.update(dict.fromkeys(section))
    return list(deps)


def detect_issues(files: list[FileSnapshot]) -> list[str]:
    """Marker scan only: flags JS/TS files that mention console.error. Not a linter."""
    return [
        f"Potential error in {f.name}"
        for f in files
        if f.content and (f.language or "") in _SCANNED_LANGUAGES and ISSUE_MARKER in f.content
    ]


async def gather_context(store: ProjectStore, project_id: int) -> ProjectContext:
    project = await store.get_project(project_id)
    if not project:
        raise ProjectNotFoundError(project_id)

    # Whole file list, no paging: projects here are small.
    files = [f for f in await store.list_files(project_id) if f.project_id == project_id]

    return ProjectContext(
        project=project,
        files=files,
        structure=build_file_structure(files),
        dependencies=extract_dependencies(files),
        errors=detect_issues(files),
    )
