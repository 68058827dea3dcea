"""
Configuration management for Claude Workflows.

Settings come from an optional workflows.yaml in the project .claude directory,
falling back to the one in the global ~/.claude directory, then to defaults.
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .source import WorkflowSource


class WorkflowsConfig:
    """Configuration for the workflow source repository."""

    CONFIG_FILE = 'workflows.yaml'
    DEFAULTS = {
        'repo_owner': 'elitwilson',
        'repo_name': 'claude-workflows',
        'default_branch': 'main',
        'timeout': 30.0,
    }

    def __init__(self, project_root: Path, home_dir: Path):
        self.project_root = Path(project_root)
        self.home_dir = Path(home_dir)
        self.config_path: Optional[Path] = None
        self.config = self._load_config()

    def _candidate_paths(self) -> List[Path]:
        return [
            self.project_root / '.claude' / self.CONFIG_FILE,
            self.home_dir / '.claude' / self.CONFIG_FILE,
        ]

    def _load_config(self) -> Dict:
        """Load configuration from the first config file found, or use defaults."""
        config = dict(self.DEFAULTS)

        for path in self._candidate_paths():
            if not path.exists():
                continue
            try:
                with open(path, encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                print(f"Warning: Could not load config file {path}: {e}")
                continue

            if not isinstance(data, dict):
                print(f"Warning: Ignoring config file {path}: expected a mapping")
                continue

            config.update({key: value for key, value in data.items() if key in self.DEFAULTS})
            self.config_path = path
            break

        return config

    @property
    def source(self) -> WorkflowSource:
        """The configured workflow source repository."""
        return WorkflowSource(
            str(self.config['repo_owner']),
            str(self.config['repo_name']),
            str(self.config['default_branch'])
        )

    @property
    def timeout(self) -> float:
        """HTTP timeout in seconds."""
        try:
            return float(self.config['timeout'])
        except (TypeError, ValueError):
            return float(self.DEFAULTS['timeout'])
