# network.py
#
# (c) 2023 rdsprobe authors
#

import ipaddress
import socket
from typing import Optional

import netifaces

from rdsprobe import logsetup
from rdsprobe.model import AddressParseError, Endpoint
from rdsprobe.model.endpoint import IPAddress

log = logsetup.get_root_logger()


def resolve_endpoint(hoststr: str) -> Endpoint:
    """
    Resolves hoststr to the first address returned by 'getaddrinfo'.
    A numeric-only lookup is tried first so that literals never cause name service traffic,
    only then a full lookup (which may query DNS) is done.
    """
    try:
        infos = socket.getaddrinfo(hoststr, None, flags=socket.AI_NUMERICHOST)
    except socket.gaierror:
        log.debug(f'\'{hoststr}\' is not a numeric address, resolving')
        try:
            infos = socket.getaddrinfo(hoststr, None)
        except socket.gaierror as e:
            raise AddressParseError(hoststr, e.strerror)
    except UnicodeError as e:
        raise AddressParseError(hoststr, str(e))

    if not infos:
        raise AddressParseError(hoststr, 'no address returned')
    # [(family, type, proto, canonname, sockaddr)] -> just use the first one
    family, _, _, _, sockaddr = infos[0]
    if family not in (socket.AF_INET, socket.AF_INET6):
        raise AddressParseError(hoststr, f'getaddrinfo() returns unsupported family: {family}')
    endpoint = Endpoint.from_sockaddr(family, sockaddr)
    log.debug(f'Resolved \'{hoststr}\' to {endpoint.address}')
    return endpoint


def find_interface(address: IPAddress) -> Optional[str]:
    """
    Returns the name of the interface the address is assigned to, None if there is none.
    """
    family = netifaces.AF_INET if address.version == 4 else netifaces.AF_INET6
    for nic_name in netifaces.interfaces():
        for link in netifaces.ifaddresses(nic_name).get(family, []):
            try:
                # scoped addresses (e.g. 'fe80::be76:4eff:fe10:5b8d%eth0') do not parse, so split off the scope
                if ipaddress.ip_address(link['addr'].split('%')[0]) == address:
                    return nic_name
            except (KeyError, ValueError):
                continue  # ignore parsing errors
    return None


def describe_source(source: Endpoint, explicit: bool) -> str:
    nic_name = find_interface(source.address)
    if nic_name is None:
        if explicit:
            log.warning(f'Source address {source.address} is not assigned to any local interface, '
                        f'binding is likely to fail')
        return str(source.address)
    return f'{source.address} ({nic_name})'
