from typing import Optional

from .. import logsetup
from ..config import AppConfig, RunConfig
from ..probing import DrainSpinner, ProbeScheduler, SocketFactory, TimingReporter


class Wiring:
    """
    Holds and initialises the collaborators of a run, inspired by Dependency Injection,
    but implemented as a poor person's solution with a single object holding everything.
    """

    def __init__(self, conf: AppConfig, run_config: RunConfig):
        self.conf: AppConfig = conf
        self.run_config: RunConfig = run_config
        self.log = logsetup.get_root_logger()
        self.factory = SocketFactory(run_config)
        self.spinner: Optional[DrainSpinner] = DrainSpinner() if run_config.spin else None
        self.scheduler = ProbeScheduler(run_config, self.spinner)
        self.reporter = TimingReporter()

    @property
    def show_details(self) -> bool:
        return self.conf.verbosity > 0
