from .wiring import Wiring
from .. import logsetup
from ..libtools import network
from ..model import RunResult
from ..probing import ProbeGroup

"""
Runs the actual business logic of the application, calling high-level API methods of other modules.
"""

log = logsetup.get_root_logger()


def run(wiring: Wiring) -> RunResult:
    run_config = wiring.run_config
    source = wiring.factory.source_endpoint()
    log.info(
        f'Probing {run_config.destination.address} from '
        f'{network.describe_source(source, explicit=run_config.source is not None)} '
        f'with {run_config.nsockets} sockets, {run_config.per_socket_count} packets each'
    )
    with ProbeGroup(wiring.factory, run_config.nsockets) as group:
        result = wiring.reporter.run(wiring.scheduler, group)
    wiring.reporter.report(result, details=wiring.show_details)
    return result
