"""Rich console used for logging and command-line generation.

"""
import logging
#======================== Rich ========================#
#------------- Imports -------------#
import rich.console
import rich.logging
import rich.progress
import rich.prompt
import rich.theme
import rich.traceback
#------------- Settings -------------#
cblue = '#0675BB'
cgreen = 'green'
theme = rich.theme.Theme({
    'success': cgreen,
    'emph': 'blue',
    'failure': '#E03E52',
    'logging.level.info': cblue,
})
console = rich.console.Console(theme=theme, stderr=True)
#--- Prompts ---#
CONFLICT_CHOICES = ['overwrite', 'skip', 'merge', 'keep', 'cancel']


def ask_conflict(path, output_path, is_dir):
    """ Ask what to do with an existing generation target. """
    kind = 'Folder' if is_dir else 'File'
    choices = [c for c in CONFLICT_CHOICES if c != ('keep' if is_dir else 'merge')]
    return rich.prompt.Prompt.ask(
        f'[emph]{kind} exists[/]: {path.relative_to(output_path)}',
        choices=choices,
        default='skip',
        console=console,
    )


def Progress(label='Generating'):
    """ Progress bar for file generation. """
    return rich.progress.Progress(
        rich.progress.SpinnerColumn('dots', style=cblue),
        rich.progress.TextColumn(f'{label}:', style=cblue),
        rich.progress.BarColumn(complete_style=cgreen, finished_style=cblue),
        rich.progress.MofNCompleteColumn(),
        console=console,
    )
#======================== End Rich ========================#

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(verbose: bool = False):
    """ Route the package loggers through the Rich console. """
    rich.traceback.install(console=console)
    handler = rich.logging.RichHandler(
        console=console,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logger = logging.getLogger("templatetree")
    for existing in list(logger.handlers):
        if isinstance(existing, rich.logging.RichHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
