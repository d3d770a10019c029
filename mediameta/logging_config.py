"""
Configuration du logging de mediameta via loguru.

mediameta est une bibliotheque : ses logs sont desactives a l'import
(logger.disable dans mediameta/__init__.py) et ne sont emis qu'une fois
l'application hote a appele configure_logging, directement ou via
Container.init_resources().

Sinks installes a partir de Settings :
- stderr au niveau log_level, pour suivre les appels aux sources
- fichier JSON en DEBUG avec rotation, qui garde chaque requete HTTP
"""

import sys

from loguru import logger

from mediameta.config import Settings

PACKAGE_NAME = "mediameta"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(settings: Settings, console: bool = True) -> list[int]:
    """
    Active les logs de mediameta et installe ses sinks.

    Seuls les messages du package sont routes vers ces sinks : les
    handlers deja installes par l'application hote sont conserves.

    Args:
        settings: Parametres (log_level, log_file, log_rotation_size,
                  log_retention_count)
        console: False pour ne garder que le fichier (ex: tests)

    Returns:
        Identifiants loguru des sinks ajoutes (pour logger.remove)
    """
    def only_package(record) -> bool:
        return (record["name"] or "").startswith(PACKAGE_NAME)

    sink_ids = []
    if console:
        sink_ids.append(
            logger.add(
                sys.stderr,
                level=settings.log_level,
                format=CONSOLE_FORMAT,
                filter=only_package,
                colorize=True,
            )
        )

    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    sink_ids.append(
        logger.add(
            settings.log_file,
            level="DEBUG",
            format="{message}",
            filter=only_package,
            serialize=True,
            rotation=settings.log_rotation_size,
            retention=settings.log_retention_count,
            compression="zip",
            enqueue=True,
        )
    )

    logger.enable(PACKAGE_NAME)
    logger.debug(f"Logging mediameta actif ({settings.log_file})")
    return sink_ids
