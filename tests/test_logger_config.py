from loguru import logger

import logger_config


def test_setup_logging_installs_single_console_sink(capsys):
    logger_config.setup_logging('warning')
    try:
        logger.info('hidden')
        logger.warning('shown')
    finally:
        logger.remove()

    out = capsys.readouterr().out
    assert 'shown' in out
    assert 'hidden' not in out
    assert 'WARNING' in out
