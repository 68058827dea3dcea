"""
Workflow source repository for Claude Workflows.

Identifies the GitHub repository and branch that workflow files are read from.
"""

RAW_CONTENT_URL = "https://raw.githubusercontent.com"


class WorkflowSource:
    """Represents the GitHub repository serving workflow files."""

    def __init__(self, owner: str, repo: str, branch: str = "main"):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.name = f"{owner}/{repo}"

    @property
    def raw_base_url(self) -> str:
        """Base URL for raw file content; files live at {base}/{branch}/{path}."""
        return f"{RAW_CONTENT_URL}/{self.owner}/{self.repo}"

    @classmethod
    def from_spec(cls, spec: str) -> 'WorkflowSource':
        """Create WorkflowSource from spec string like 'owner/repo' or 'owner/repo@branch'."""
        if '@' in spec:
            repo_part, branch = spec.split('@', 1)
        else:
            repo_part, branch = spec, 'main'

        if '/' not in repo_part or not branch:
            raise ValueError(f"Invalid repository spec: {spec}. Expected format: owner/repo[@branch]")

        owner, repo = repo_part.split('/', 1)
        if not owner or not repo or '/' in repo:
            raise ValueError(f"Invalid repository spec: {spec}. Expected format: owner/repo[@branch]")

        return cls(owner, repo, branch)

    def __repr__(self) -> str:
        return f"WorkflowSource({self.name}@{self.branch})"
