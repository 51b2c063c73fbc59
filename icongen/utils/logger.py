"""
IconGen - Logging setup
"""
import logging

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(level='INFO'):
    """
    Configure root logging once at startup.

    Args:
        level: Level name (e.g. 'INFO', 'DEBUG') or numeric level

    Returns:
        The resolved numeric level
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level
    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    logging.getLogger('PIL').setLevel(max(resolved, logging.INFO))
    return resolved
