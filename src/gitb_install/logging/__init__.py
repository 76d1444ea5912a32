"""
Logging module for the installer.

Import directly from sub-modules:
    from gitb_install.logging.setup import get_logger, setup_logging
    from gitb_install.logging.utilities import log_with_context, log_exception
    from gitb_install.logging.context import set_log_context
"""
