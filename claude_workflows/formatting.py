"""
Output formatting utilities for Claude Workflows.

Provides color codes and formatting functions for terminal output.
"""

from typing import Dict, List


class Colors:
    """ANSI color codes for terminal output."""
    RED = '\033[0;31m'
    GREEN = '\033[0;32m'
    YELLOW = '\033[1;33m'
    BLUE = '\033[0;34m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color

    @staticmethod
    def colorize(text: str, color: str) -> str:
        """Wrap text in color codes."""
        return f"{color}{text}{Colors.NC}"


def colored_status(status_type: str, message: str = "") -> str:
    """Return a colored status message.

    Args:
        status_type: Type of status (SUCCESS, ERROR, WARNING, INFO, etc.)
        message: Optional message to append after the status

    Returns:
        Colored status string
    """
    color_map = {
        'SUCCESS': Colors.GREEN,
        'ERROR': Colors.RED,
        'WARNING': Colors.YELLOW,
        'INFO': Colors.BLUE,
        'DRY RUN': Colors.CYAN,
        'UPGRADE': Colors.CYAN,
        'MODIFIED': Colors.YELLOW,
        'UNTRACKED': Colors.RED,
        'UP TO DATE': Colors.GREEN,
    }

    color = color_map.get(status_type, Colors.NC)
    status_text = Colors.colorize(f"[{status_type}]", color)

    if message:
        return f"{status_text} {message}"
    return status_text


def format_scope_summary(title: str, result: Dict) -> str:
    """Format the upgrade outcome of one scope.

    Args:
        title: Heading such as "Global (~/.claude/)"
        result: Result dict from perform_upgrade

    Returns:
        Multi-line summary with counts, then skipped and errored files
    """
    lines = [
        f"{title} Summary:",
        f"  Upgraded: {len(result['upgraded'])}",
        f"  Skipped: {len(result['skipped'])}",
        f"  Errors: {len(result['errors'])}",
    ]

    if result['upgraded']:
        lines.append("\nUpgraded:")
        lines.extend(f"  - {name}" for name in result['upgraded'])

    if result['skipped']:
        lines.append("\nSkipped:")
        lines.extend(f"  - {item['file']}: {item['reason']}" for item in result['skipped'])

    if result['errors']:
        lines.append("\n" + colored_status('ERROR', "Errors:"))
        lines.extend(f"  - {item['file']}: {item['error']}" for item in result['errors'])

    return '\n'.join(lines)


def format_status_table(title: str, entries: List[Dict]) -> str:
    """Format the offline status of one scope."""
    if not entries:
        return f"{title}: no workflow files installed"

    lines = [f"{title} ({len(entries)} file{'s' if len(entries) != 1 else ''}):"]
    for entry in entries:
        version = f"v{entry['version']}" if entry['version'] else "no version"
        if not entry['tracked']:
            state = colored_status('UNTRACKED')
        elif entry['modified']:
            state = colored_status('MODIFIED')
        else:
            state = ''
        source = f" <- {entry['source']}" if entry['source'] else ''
        lines.append(f"  {entry['name']} ({version}){source} {state}".rstrip())

    return '\n'.join(lines)
