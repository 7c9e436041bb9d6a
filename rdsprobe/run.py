#!/usr/bin/env python3
#
# run.py
#
# (c) 2023 rdsprobe authors
#

"""
Does the dirty preparation work so that the bootstrap module can act just upon business objects.
"""

import sys

from . import bootstrap, config
from . import logsetup
from .config.util import print_usage_and_exit
from .model import BusinessException, ConfigurationException

# setup root logger
log = logsetup.setup_root_logger()


def _prepare_context(argv=None):
    conf = config.AppConfig(argv)
    log.setLevel(conf.log_level)
    try:
        run_config = conf.to_run_config()
    except ConfigurationException as e:
        print_usage_and_exit(str(e))
    log.debug(f'Configured {run_config}')
    return bootstrap.Wiring(conf, run_config)


def _run_main(argv=None) -> int:
    wiring = _prepare_context(argv)
    result = bootstrap.run(wiring)
    if result.aborted:
        # the partial summary was printed already, but the run did not complete
        return 1
    return 0


def main(argv=None):
    # noinspection PyBroadException
    try:
        ret = _run_main(argv)
    except BusinessException as e:
        log.critical(str(e))
        print(f'{e}', file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        log.warning('Interrupted')
        sys.exit(130)
    except Exception:
        log.exception("Unexpected exception encountered")
        sys.exit(1)
    sys.exit(ret)


if __name__ == '__main__':
    main()
