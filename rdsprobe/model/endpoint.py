import ipaddress
import socket
from typing import Tuple, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class Endpoint:
    """
    An IPv4 or IPv6 address with port. Instances are not modified after creation,
    use with_port() to obtain a copy with a different port.
    """

    def __init__(self, address: IPAddress, port: int = 0, flowinfo: int = 0, scope_id: int = 0):
        self._address = address
        self._port = port
        self._flowinfo = flowinfo
        self._scope_id = scope_id

    @classmethod
    def from_sockaddr(cls, family: int, sockaddr: Tuple) -> 'Endpoint':
        if family == socket.AF_INET:
            host, port = sockaddr[:2]
            return cls(ipaddress.IPv4Address(host), port)
        elif family == socket.AF_INET6:
            host, port, flowinfo, scope_id = sockaddr
            # scoped addresses come back as 'fe80::1%eth0'
            return cls(ipaddress.IPv6Address(host.split('%')[0]), port, flowinfo, scope_id)
        raise ValueError(f'Unsupported address family {family}')

    @property
    def address(self) -> IPAddress:
        return self._address

    @property
    def port(self) -> int:
        return self._port

    @property
    def ip_version(self) -> int:
        return self._address.version

    @property
    def family(self) -> int:
        return socket.AF_INET if self.ip_version == 4 else socket.AF_INET6

    def with_port(self, port: int) -> 'Endpoint':
        return Endpoint(self._address, port, self._flowinfo, self._scope_id)

    def sockaddr(self) -> Tuple:
        if self.ip_version == 4:
            return str(self._address), self._port
        return str(self._address), self._port, self._flowinfo, self._scope_id

    def __eq__(self, other):
        if isinstance(other, Endpoint):
            return self.sockaddr() == other.sockaddr()
        else:
            return NotImplemented

    def __hash__(self):
        return hash(self.sockaddr())

    def __str__(self):
        if self.ip_version == 6:
            return f'[{self._address}]:{self._port}'
        return f'{self._address}:{self._port}'

    def __repr__(self):
        return f'Endpoint({self})'
