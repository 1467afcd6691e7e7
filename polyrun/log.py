"""
Diagnostic messages of polyrun. Caveats meant for the user are raised with
``warnings.warn`` instead.
"""
import logging

logger = logging.getLogger('polyrun')
logger.addHandler(logging.NullHandler())

def debug_mode():
    "Print debug messages of polyrun to stderr."
    if not any(isinstance(handler, logging.StreamHandler) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(levelname)s [%(module)s] %(message)s'))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
