# factory.py
#
# (c) 2023 rdsprobe authors
#

import errno
import fcntl
import os
import socket
import struct
from typing import Optional

from rdsprobe import libconstants as const
from rdsprobe import logsetup
from rdsprobe.config import RunConfig
from rdsprobe.model import BindError, BusinessException, Endpoint, ProbeSocket, RouteProbeError, \
    SocketCreateError, TosSetError

log = logsetup.get_root_logger()


class SocketFactory:
    """
    Creates RDS sockets bound to the source address of a run.

    If the run has no explicit source, the local address is the one the kernel picks
    when routing towards the destination. It is determined once and reused for every socket.

    open_socket and ioctl default to the real socket module and fcntl.ioctl, tests pass fakes.
    """

    def __init__(self, conf: RunConfig, open_socket=socket.socket, ioctl=fcntl.ioctl):
        self.conf = conf
        self._open_socket = open_socket
        self._ioctl = ioctl
        self._source: Optional[Endpoint] = conf.source

    def source_endpoint(self) -> Endpoint:
        if self._source is None:
            self._source = self._guess_source()
            log.info(f'Using source address {self._source.address} for {self.conf.destination.address}')
        # ports are assigned by RDS itself
        return self._source.with_port(0)

    def create(self, slot: int) -> ProbeSocket:
        try:
            sock = self._open_socket(const.AF_RDS, socket.SOCK_SEQPACKET, 0)
        except OSError as e:
            raise SocketCreateError('unable to create RDS socket', e)
        try:
            source = self.source_endpoint()
            if source.ip_version != 4:
                # CPython only knows sockaddr_in for AF_RDS
                raise BindError(f'bind() to {source.address} failed, RDS over IPv6 is not supported',
                                OSError(errno.EAFNOSUPPORT, os.strerror(errno.EAFNOSUPPORT)))
            try:
                sock.bind(source.sockaddr())
            except (OSError, TypeError) as e:
                raise BindError(f'bind() to {source.address} failed', e)
            if self.conf.tos:
                self._set_tos(sock)
        except BusinessException:
            sock.close()
            raise
        log.debug(f'Created RDS socket {slot} bound to {source.address}')
        return ProbeSocket(sock, slot)

    def _set_tos(self, sock):
        try:
            self._ioctl(sock.fileno(), const.SIOCRDSSETTOS, struct.pack('B', self.conf.tos))
        except OSError as e:
            raise TosSetError(f'failed to set TOS {self.conf.tos}', e)

    def _guess_source(self) -> Endpoint:
        """
        Connects a throwaway UDP socket towards the destination and reads back the local address
        the kernel chose. Nothing is sent on the wire.
        """
        dst = self.conf.destination.with_port(const.ROUTE_PROBE_PORT)
        try:
            helper = self._open_socket(dst.family, socket.SOCK_DGRAM, 0)
        except OSError as e:
            raise RouteProbeError('unable to create UDP socket', e)
        try:
            try:
                helper.connect(dst.sockaddr())
            except OSError as e:
                raise RouteProbeError(f'unable to connect to {dst.address}', e)
            try:
                local = helper.getsockname()
            except OSError as e:
                raise RouteProbeError('getsockname failed', e)
        finally:
            helper.close()
        return Endpoint.from_sockaddr(dst.family, local).with_port(0)
