#!/usr/bin/env python3
"""
Claude Workflows - Add and upgrade Claude workflow rules.

This script installs curated markdown workflow rules from a GitHub repository
into a project (.claude/rules/) or globally (~/.claude/rules/), and upgrades
installed rules when newer versions are published without clobbering local
edits.
"""

import argparse
import os
import sys
from typing import List, Optional

from claude_workflows import __version__
from claude_workflows.config import WorkflowsConfig
from claude_workflows.discovery import (
    discover_core_workflows,
    discover_stack_workflows,
    discover_stacks,
)
from claude_workflows.exceptions import (
    FetchError,
    FileOperationError,
    InvalidScopeError,
    WorkflowsError,
)
from claude_workflows.fetcher import ContentFetcher
from claude_workflows.formatting import colored_status, format_scope_summary, format_status_table
from claude_workflows.install import install_workflows
from claude_workflows.scope import (
    GLOBAL_SCOPE,
    PROJECT_SCOPE,
    SCOPES,
    get_rules_directory,
    get_target_directory,
    resolve_home_path,
)
from claude_workflows.source import WorkflowSource
from claude_workflows.status import check_status
from claude_workflows.upgrade import upgrade_all
from fs_backend import BackendError, LocalBackend, get_home_dir

SCOPE_TITLES = {
    GLOBAL_SCOPE: "Global (~/.claude/)",
    PROJECT_SCOPE: "Project (.claude/)",
}


def warn(message: str):
    print(colored_status('WARNING', message))


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog='claude-workflows',
        description='Claude Workflows - Add and upgrade Claude workflow rules',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pick workflows interactively and install them into this project
  %(prog)s add

  # Install specific workflows globally without prompts
  %(prog)s add --scope global --core tdd-workflow.md --stack python

  # Install every core workflow, replacing existing copies
  %(prog)s add --all-core --force

  # Upgrade installed workflows in both scopes
  %(prog)s upgrade
  %(prog)s upgrade --dry-run
  %(prog)s upgrade --force   # Overwrite locally modified files

  # Show installed workflows
  %(prog)s list

  # Use a different source repository
  %(prog)s --repo myorg/my-workflows@develop upgrade
        """
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--yes', '-y', action='store_true',
                        help='Skip all prompts and use default answers')
    parser.add_argument('--repo', metavar='OWNER/REPO[@BRANCH]',
                        help='Source repository (default: from workflows.yaml)')
    parser.add_argument('--project-root', metavar='PATH',
                        help='Project root directory (default: current directory)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Add command
    add_parser = subparsers.add_parser('add', help='Install workflow files from the repository')
    add_parser.add_argument('--scope', choices=SCOPES,
                            help='Install to the project or global .claude directory')
    add_parser.add_argument('--core', nargs='+', metavar='NAME',
                            help='Core workflows to install (e.g. tdd-workflow.md)')
    add_parser.add_argument('--all-core', action='store_true',
                            help='Install all core workflows')
    add_parser.add_argument('--stack', nargs='+', metavar='NAME',
                            help='Language stacks to install')
    add_parser.add_argument('--force', action='store_true',
                            help='Overwrite workflow files that are already installed')
    add_parser.add_argument('--dry-run', action='store_true',
                            help='Preview changes without writing files')

    # Upgrade command
    upgrade_parser = subparsers.add_parser('upgrade', help='Update installed workflow files to latest versions')
    upgrade_parser.add_argument('--force', action='store_true',
                                help='Overwrite locally modified files')
    upgrade_parser.add_argument('--dry-run', action='store_true',
                                help='Preview changes without writing files')

    # List command
    list_parser = subparsers.add_parser('list', help='Show installed workflow files')
    list_parser.add_argument('--scope', choices=SCOPES,
                             help='Only show one scope (default: both)')

    # Config command
    config_parser = subparsers.add_parser('config', help='Show configuration')
    config_parser.add_argument('--show', action='store_true', help='Show current configuration')

    return parser


def _prompt_choice(message: str, options: List[str], default: int = 0) -> int:
    """Ask for a single choice; returns the selected index."""
    print(message)
    for i, option in enumerate(options, 1):
        print(f"  {i}) {option}")

    while True:
        response = input(f"Choice [{default + 1}]: ").strip()
        if not response:
            return default
        if response.isdigit() and 1 <= int(response) <= len(options):
            return int(response) - 1
        print(f"   Please enter a number between 1 and {len(options)}")


def _prompt_selection(message: str, options: List[str], default_all: bool = False) -> List[int]:
    """Ask for any number of choices; returns the selected indices."""
    if not options:
        return []

    print(message)
    for i, option in enumerate(options, 1):
        print(f"  {i}) {option}")

    hint = 'all' if default_all else 'none'
    while True:
        response = input(f"Select numbers separated by commas, 'all' or 'none' [{hint}]: ").strip().lower()
        if not response:
            response = hint
        if response == 'all':
            return list(range(len(options)))
        if response == 'none':
            return []

        parts = [part.strip() for part in response.split(',') if part.strip()]
        if all(part.isdigit() and 1 <= int(part) <= len(options) for part in parts):
            return sorted({int(part) - 1 for part in parts})
        print(f"   Please enter numbers between 1 and {len(options)}")


def run_add(args, source: WorkflowSource, fetcher: ContentFetcher,
            project_root: str, home_dir: str) -> int:
    """Handle the add command."""
    print("Add Claude Workflows\n")

    scope = args.scope
    if not scope:
        if args.yes:
            scope = PROJECT_SCOPE
        else:
            choice = _prompt_choice("Install to:", [SCOPE_TITLES[PROJECT_SCOPE], SCOPE_TITLES[GLOBAL_SCOPE]])
            scope = [PROJECT_SCOPE, GLOBAL_SCOPE][choice]

    print(f"\nInstalling to {scope} scope\n")
    print("Discovering available workflows...\n")

    core_workflows = discover_core_workflows(fetcher, source)
    available_stacks = discover_stacks(fetcher, source)

    explicit = args.all_core or args.core or args.stack
    if args.all_core:
        selected_core = [w.path for w in core_workflows]
    elif args.core:
        by_name = {w.name: w.path for w in core_workflows}
        by_name.update({w.name[:-len('.md')]: w.path for w in core_workflows})
        unknown = [name for name in args.core if name not in by_name]
        if unknown:
            raise WorkflowsError(f"Unknown core workflow(s): {', '.join(unknown)}")
        selected_core = [by_name[name] for name in args.core]
    elif explicit:
        selected_core = []
    elif args.yes:
        selected_core = [w.path for w in core_workflows]
    else:
        indices = _prompt_selection("Select core workflows to install:",
                                    [w.name for w in core_workflows], default_all=True)
        selected_core = [core_workflows[i].path for i in indices]

    print(f"\nSelected {len(selected_core)} core workflow(s)\n")

    stack_names = [s.name for s in available_stacks]
    if args.stack:
        unknown = [name for name in args.stack if name not in stack_names]
        if unknown:
            raise WorkflowsError(f"Unknown stack(s): {', '.join(unknown)}")
        selected_stacks = args.stack
    elif explicit or args.yes:
        selected_stacks = []
    else:
        indices = _prompt_selection("Select language stacks to install:",
                                    [s.display_name for s in available_stacks])
        selected_stacks = [available_stacks[i].name for i in indices]

    stack_files = []
    for stack_name in selected_stacks:
        stack_files.extend(w.path for w in discover_stack_workflows(fetcher, source, stack_name))

    print(f"\nSelected {len(selected_stacks)} stack(s) ({len(stack_files)} files)\n")

    all_files = selected_core + stack_files
    claude_dir = get_target_directory(scope, project_root, home_dir)

    print("Summary:")
    print(f"  Total files to install: {len(all_files)}")
    print(f"  Core workflows: {len(selected_core)}")
    print(f"  Stack workflows: {len(stack_files)}")
    print(f"  Target directory: {get_rules_directory(claude_dir)}")

    if not all_files:
        print(colored_status('INFO', "Nothing selected, nothing to install"))
        return 0

    if args.dry_run:
        print("\n" + colored_status('DRY RUN', "No files will be created") + "\n")
    else:
        print("\nInstalling workflow files...\n")

    result = install_workflows(all_files, claude_dir, source.raw_base_url, source.branch,
                               args.dry_run, backend=LocalBackend(), fetcher=fetcher,
                               force=args.force, log=print, warn=warn)

    for item in result['skipped']:
        print(colored_status('INFO', f"Skipped {item['file']}: {item['reason']}"))
    for item in result['errors']:
        print(colored_status('ERROR', f"Error installing {item['file']}: {item['error']}"), file=sys.stderr)

    print(f"\nInstallation {'preview' if args.dry_run else 'complete'}!")
    print(f"  Successfully processed: {len(result['installed'])}")
    if result['skipped']:
        print(f"  Skipped: {len(result['skipped'])}")
    if result['errors']:
        print(f"  Errors: {len(result['errors'])}")
        return 1
    return 0


def run_upgrade(args, source: WorkflowSource, fetcher: ContentFetcher,
                project_root: str, home_dir: str) -> int:
    """Handle the upgrade command."""
    print("Upgrade Claude Workflows\n")

    if args.dry_run:
        print(colored_status('DRY RUN', "No files will be modified") + "\n")

    results = upgrade_all(project_root, home_dir, source.raw_base_url, source.branch,
                          args.force, args.dry_run, backend=LocalBackend(), fetcher=fetcher,
                          log=print, warn=warn)

    for scope in (GLOBAL_SCOPE, PROJECT_SCOPE):
        print()
        print(format_scope_summary(SCOPE_TITLES[scope], results[scope]))

    total_errors = sum(len(result['errors']) for result in results.values())
    print()
    if total_errors:
        print(colored_status('ERROR', f"Upgrade finished with {total_errors} error(s)"))
        return 1

    print(colored_status('SUCCESS', "Upgrade preview complete" if args.dry_run else "Upgrade complete"))
    return 0


def run_list(args, project_root: str, home_dir: str) -> int:
    """Handle the list command."""
    backend = LocalBackend()
    scopes = [args.scope] if args.scope else [GLOBAL_SCOPE, PROJECT_SCOPE]

    for scope in scopes:
        claude_dir = get_target_directory(scope, project_root, home_dir)
        entries = check_status(get_rules_directory(claude_dir), claude_dir, backend, warn=warn)
        print(format_status_table(SCOPE_TITLES[scope], entries))
        print()
    return 0


def run_config(args, config: WorkflowsConfig, source: WorkflowSource) -> int:
    """Handle the config command."""
    if not args.show:
        print("[ERROR] Must specify --show")
        return 1

    print("Claude Workflows Configuration:")
    print(f"   Repository: {source.name}")
    print(f"   Branch: {source.branch}")
    print(f"   Raw Content URL: {source.raw_base_url}")
    print(f"   Timeout: {config.timeout}s")
    print(f"   Config File: {config.config_path or 'none (defaults)'}")
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        home_dir = get_home_dir()
        project_root = os.getcwd()
        if args.project_root:
            project_root = os.path.abspath(resolve_home_path(args.project_root, home_dir))
        config = WorkflowsConfig(project_root, home_dir)
        source = WorkflowSource.from_spec(args.repo) if args.repo else config.source

        if args.command == 'list':
            return run_list(args, project_root, home_dir)
        if args.command == 'config':
            return run_config(args, config, source)

        with ContentFetcher(timeout=config.timeout) as fetcher:
            if args.command == 'add':
                return run_add(args, source, fetcher, project_root, home_dir)
            return run_upgrade(args, source, fetcher, project_root, home_dir)

    except KeyboardInterrupt:
        print("\n[ERROR] Operation cancelled by user", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except FetchError as e:
        print(f"[ERROR] Network error: {e}", file=sys.stderr)
        return 1
    except InvalidScopeError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, NotADirectoryError, PermissionError, BackendError) as e:
        print(f"[ERROR] File system error: {e}", file=sys.stderr)
        return 1
    except FileOperationError as e:
        print(f"[ERROR] File operation failed: {e}", file=sys.stderr)
        return 1
    except WorkflowsError as e:
        print(f"[ERROR] Claude Workflows error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"[ERROR] Unexpected error: {e}", file=sys.stderr)
        if os.getenv('DEBUG'):
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
