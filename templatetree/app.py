"""
TemplateTree application entrypoint.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .console import Progress, ask_conflict, console, setup_logging
from .constants import App
from .template_engine import ModuleParseError, generate_module, parse_module_yaml

logger = logging.getLogger(__name__)


def _init_args(argv=None):
    """ Define command-line arguments """
    parser = argparse.ArgumentParser(
        prog=App.NAME,
        description='Edit module templates: file trees with ${KEY} placeholders.',
    )
    parser.add_argument(
        'module', nargs='?', type=Path,
        help='module YAML file to open. Defaults to the last saved module.'
    )
    parser.add_argument(
        '-g', '--generate', metavar='DIR', type=Path,
        help='generate MODULE into DIR without opening the editor.'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true', help='enable debug logging.'
    )
    args = parser.parse_args(argv)
    if args.generate is not None and args.module is None:
        parser.error('--generate requires a module file')
    return args


def generate_from_cli(module_path: Path, output_path: Path) -> int:
    """Generate a module file into output_path. Returns the exit status."""
    try:
        module = parse_module_yaml(module_path.read_text(encoding='utf-8'))
    except (OSError, ModuleParseError) as e:
        logger.error("Failed to open %s: %s", module_path, e)
        return 1

    with Progress(module.name) as progress:
        task = progress.add_task('generate', total=module.template.count_files())

        def on_progress(done, total):
            progress.update(task, completed=done, total=total)

        def on_conflict(path, root, is_dir):
            progress.stop()
            try:
                return ask_conflict(path, root, is_dir)
            finally:
                progress.start()

        success, message = generate_module(
            module, output_path,
            progress_callback=on_progress,
            conflict_callback=on_conflict,
        )

    console.print(message, style='success' if success else 'failure', markup=False)
    return 0 if success else 1


def run(argv=None):
    """Run the TemplateTree application."""
    args = _init_args(argv)
    setup_logging(args.verbose)

    if args.generate is not None:
        sys.exit(generate_from_cli(args.module, args.generate))

    # Imported late so --help and --generate work without a display
    from PyQt6.QtWidgets import QApplication
    from .styles import get_ui_font
    from .ui.window import TemplateTreeWindow

    app = QApplication(sys.argv[:1])
    app.setApplicationName(App.NAME)
    app.setApplicationVersion(__version__)
    app.setFont(get_ui_font())

    window = TemplateTreeWindow(module_path=args.module)
    window.show()

    sys.exit(app.exec())
