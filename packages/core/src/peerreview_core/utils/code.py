from pathlib import PurePath

REVIEWABLE_EXTENSIONS = {
    ".ts",
    ".tsx",
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".py",
    ".go",
    ".rs",
    ".java",
    ".kt",
    ".swift",
    ".c",
    ".cpp",
    ".h",
    ".hpp",
    ".cs",
    ".rb",
    ".php",
    ".scala",
    ".clj",
    ".yml",
    ".yaml",
    ".json",
    ".toml",
    ".tf",
    ".hcl",
    ".bicep",
    ".sh",
    ".bash",
    ".zsh",
    ".ps1",
    ".sql",
    ".graphql",
    ".prisma",
    ".md",
    ".mdx",
    ".dockerfile",
    ".containerfile",
}

# Conventionally named files that carry no extension.
REVIEWABLE_FILENAMES = {"dockerfile", "makefile", "containerfile"}

LANGUAGE_MAP = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "jsx",
    ".py": "python",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".swift": "swift",
    ".c": "c",
    ".cpp": "cpp",
    ".cs": "csharp",
    ".rb": "ruby",
    ".php": "php",
    ".scala": "scala",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".json": "json",
    ".toml": "toml",
    ".tf": "hcl",
    ".hcl": "hcl",
    ".bicep": "bicep",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "zsh",
    ".ps1": "powershell",
    ".sql": "sql",
    ".graphql": "graphql",
    ".prisma": "prisma",
    ".md": "markdown",
    ".mdx": "mdx",
}


def is_reviewable_file(file_name: str) -> bool:
    path = PurePath(file_name)
    return path.suffix.lower() in REVIEWABLE_EXTENSIONS or path.name.lower() in REVIEWABLE_FILENAMES


def language_for(file_name: str) -> str:
    return LANGUAGE_MAP.get(PurePath(file_name).suffix.lower(), "text")
