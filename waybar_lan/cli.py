"""Point d'entree en ligne de commande de waybar-lan.

Usage:
    waybar-lan [--config PATH] [--format waybar|json]
               [--no-retry] [--verbose]

Une seule ligne JSON est imprimee sur stdout. En mode Waybar,
le code de sortie vaut 0 meme en cas d'erreur : le widget doit
toujours recevoir un objet a afficher.
"""

import argparse
import sys
from typing import List, Optional

from waybar_lan import __version__
from waybar_lan.config import AppSettings, load_settings
from waybar_lan.errors import (
    ApplicationError,
    ErrorHandlerChain,
    LoggerErrorHandler,
    WaybarErrorHandler,
)
from waybar_lan.logging import FileLogger, Logger
from waybar_lan.network.base import SnapshotReporter
from waybar_lan.network.collector import NetworkCollector
from waybar_lan.network.reporter import (
    JsonSnapshotReporter,
    WaybarReporter,
)
from waybar_lan.retry import collect_with_retry

FORMAT_WAYBAR = "waybar"
FORMAT_JSON = "json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="waybar-lan",
        description="Decouverte des peripheriques du reseau local "
                    "pour un module Waybar.",
    )
    parser.add_argument(
        "-c", "--config",
        help="Fichier de configuration TOML ou JSON",
    )
    parser.add_argument(
        "-f", "--format",
        choices=[FORMAT_WAYBAR, FORMAT_JSON],
        default=FORMAT_WAYBAR,
        help="Format de sortie (defaut: waybar)",
    )
    parser.add_argument(
        "--no-retry",
        action="store_true",
        help="Une seule collecte, sans relance",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Recopie les logs sur stderr",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _build_logger(
    settings: AppSettings, verbose: bool
) -> Optional[Logger]:
    """Cree le logger fichier, None si le fichier est inaccessible."""
    try:
        return FileLogger(
            settings.logging.file,
            settings=settings.logging,
            console_output=True if verbose else None,
        )
    except OSError as e:
        print(f"waybar-lan: journal desactive ({e})", file=sys.stderr)
        return None


def _build_reporter(
    output_format: str, logger: Optional[Logger]
) -> SnapshotReporter:
    if output_format == FORMAT_JSON:
        return JsonSnapshotReporter(logger=logger)
    return WaybarReporter(logger=logger)


def main(argv: Optional[List[str]] = None) -> int:
    """Collecte le reseau et imprime le rendu demande.

    Args:
        argv: Arguments (defaut: sys.argv[1:]).

    Returns:
        Code de sortie du processus.
    """
    args = build_parser().parse_args(argv)
    waybar_mode = args.format == FORMAT_WAYBAR
    failure_code = 0 if waybar_mode else 1

    chain = ErrorHandlerChain()
    chain.add_handler(
        WaybarErrorHandler(None if waybar_mode else sys.stderr)
    )

    try:
        settings = load_settings(args.config)
    except ApplicationError as e:
        chain.handle(e)
        return failure_code

    logger = _build_logger(settings, args.verbose)
    if logger:
        chain.add_handler(LoggerErrorHandler(logger))

    delays = [] if args.no_retry else settings.retry.delays
    try:
        collector = NetworkCollector.from_settings(settings, logger=logger)
        snapshot = collect_with_retry(
            collector.collect, delays, logger=logger
        )
        output = _build_reporter(args.format, logger).report(snapshot)
    except ApplicationError as e:
        chain.handle(e)
        return failure_code
    except Exception as e:
        # Waybar doit recevoir une ligne JSON, meme sur erreur imprevue
        chain.handle(e)
        return failure_code

    print(output)
    return 0
