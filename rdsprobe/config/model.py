from typing import Callable, List, Optional

from .args import parser
from .. import libconstants as const
from .. import logsetup
from ..libtools import network
from ..model import Endpoint, FamilyMismatchError, GroupSizeError, TosRangeError


class RunConfig:
    """
    Immutable snapshot of everything a probe run needs, built once before any socket is created.
    """

    def __init__(self, destination: Endpoint, source: Optional[Endpoint] = None, count: int = 0,
                 nsockets: int = const.NSOCKETS_DEFAULT, nsockets_explicit: bool = False,
                 tos: int = 0, spin: bool = False):
        self._destination = destination
        self._source = source
        self._count = count
        self._nsockets = nsockets
        self._nsockets_explicit = nsockets_explicit
        self._tos = tos
        self._spin = spin

    @classmethod
    def from_options(cls, destination: str, source: str = None, count: int = 0, nsockets: int = None,
                     tos: int = 0, spin: bool = False,
                     resolve: Callable[[str], Endpoint] = network.resolve_endpoint) -> 'RunConfig':
        """
        Validates raw options and resolves addresses. Raises a ConfigurationException subclass
        on the first problem, before any socket exists.
        """
        if nsockets is not None and not const.NSOCKETS_MIN <= nsockets <= const.NSOCKETS_MAX:
            raise GroupSizeError(f'Invalid number of sockets <{nsockets}>, '
                                 f'must be within [{const.NSOCKETS_MIN}, {const.NSOCKETS_MAX}]')
        if not const.TOS_MIN <= tos <= const.TOS_MAX:
            raise TosRangeError(f'Bad tos <{tos}>, must be within [{const.TOS_MIN}, {const.TOS_MAX}]')

        dst_endpoint = resolve(destination)
        src_endpoint = None
        if source is not None:
            src_endpoint = resolve(source)
            if src_endpoint.family != dst_endpoint.family:
                raise FamilyMismatchError(
                    f'Source and destination address family are not the same '
                    f'(IPv{src_endpoint.ip_version} source, IPv{dst_endpoint.ip_version} destination)'
                )

        nsockets_explicit = nsockets is not None
        if not nsockets_explicit:
            nsockets = const.NSOCKETS_DEFAULT
            # never open more sockets than there are packets to send
            if count and count < nsockets:
                nsockets = count
        return cls(dst_endpoint, src_endpoint, count, nsockets, nsockets_explicit, tos, spin)

    @property
    def destination(self) -> Endpoint:
        return self._destination

    @property
    def source(self) -> Optional[Endpoint]:
        return self._source

    @property
    def count(self) -> int:
        return self._count

    @property
    def per_socket_count(self) -> int:
        # no explicit count means a single probe per socket
        return self._count if self._count else 1

    @property
    def nsockets(self) -> int:
        return self._nsockets

    @property
    def nsockets_explicit(self) -> bool:
        return self._nsockets_explicit

    @property
    def tos(self) -> int:
        return self._tos

    @property
    def spin(self) -> bool:
        return self._spin

    def __str__(self):
        return (f'RunConfig(dst={self._destination.address}, src={self._source.address if self._source else None}, '
                f'nsockets={self._nsockets}, count={self.per_socket_count}, tos={self._tos}, spin={self._spin})')


class ProbeConfig:
    def __init__(self, args):
        self.destination: str = args.destination
        self.source: Optional[str] = args.source
        self.count: int = args.count
        self.nsockets: Optional[int] = args.sockets
        self.tos: int = args.tos
        self.spin: bool = args.spin


class LoggingConfig:
    def __init__(self, args):
        self.verbosity = args.verbose - args.quiet

    @property
    def log_level(self):
        return logsetup.level_for_verbosity(self.verbosity)


class AppConfig:
    """
    Main entry point for accessing the configuration.
    """

    def __init__(self, argv: List[str] = None):
        self.args = parser.parse_args(argv)
        self.probe = ProbeConfig(self.args)
        self.logging = LoggingConfig(self.args)

    @property
    def log_level(self):
        return self.logging.log_level

    @property
    def verbosity(self):
        return self.logging.verbosity

    def to_run_config(self, resolve: Callable[[str], Endpoint] = network.resolve_endpoint) -> RunConfig:
        return RunConfig.from_options(
            self.probe.destination, source=self.probe.source, count=self.probe.count,
            nsockets=self.probe.nsockets, tos=self.probe.tos, spin=self.probe.spin,
            resolve=resolve,
        )
