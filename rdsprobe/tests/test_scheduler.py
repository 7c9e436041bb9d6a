import errno
from unittest import TestCase, mock

from rdsprobe.config import RunConfig
from rdsprobe.model import BusinessException, SpinOutcome
from rdsprobe.probing import DrainSpinner, ProbeGroup, ProbeScheduler, SocketFactory
from .fakes import FakeIoctl, FakeNetwork


def given_factory(conf: RunConfig, net: FakeNetwork) -> SocketFactory:
    return SocketFactory(conf, open_socket=net, ioctl=FakeIoctl())


class TestProbeGroup(TestCase):
    def test_sockets_are_closed_on_exit(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1')
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            slots = [it.slot for it in group]
            self.assertEqual(len(group), 8)
        # then
        self.assertEqual(slots, list(range(8)))
        self.assertTrue(all(it.closed for it in net.rds_sockets))

    def test_partially_opened_group_is_released(self):
        # given
        net = FakeNetwork()
        net.fail_rds_after = 3
        conf = RunConfig.from_options('127.0.0.1')
        # when
        with self.assertRaises(BusinessException):
            with ProbeGroup(given_factory(conf, net), conf.nsockets):
                self.fail('group must not open')
        # then
        self.assertEqual(len(net.rds_sockets), 3)
        self.assertTrue(all(it.closed for it in net.rds_sockets))


class TestProbeScheduler(TestCase):
    def test_default_group_one_probe_each(self):
        # no count: 8 sockets with one probe each
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1')
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            result = ProbeScheduler(conf).run(group)
        # then
        self.assertEqual(len(net.rds_sockets), 8)
        for sock in net.rds_sockets:
            self.assertEqual(sock.sent, [(b'', ('127.0.0.1', 0))])
        self.assertEqual(result.nsockets, 8)
        self.assertEqual(result.total_attempted, 8)
        self.assertFalse(result.aborted)
        self.assertEqual(result.spin_samples, [])

    def test_clamped_group(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1', count=2)
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            result = ProbeScheduler(conf).run(group)
        # then
        self.assertEqual(len(net.rds_sockets), 2)
        self.assertEqual([len(it.sent) for it in net.rds_sockets], [2, 2])
        self.assertEqual(result.total_attempted, 4)

    def test_failing_send_stops_run(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1', count=4, nsockets=8)
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            net.rds_sockets[2].fail_send_after = 0
            with self.assertLogs(level='ERROR'):
                result = ProbeScheduler(conf).run(group)
        # then
        self.assertEqual([it.sent for it in result.samples], [4, 4, 0, 0, 0, 0, 0, 0])
        self.assertEqual([len(it.sent) for it in net.rds_sockets], [4, 4, 0, 0, 0, 0, 0, 0])
        self.assertTrue(result.aborted)
        self.assertEqual(result.failure.slot, 2)
        self.assertEqual(result.failure.errno, errno.ENOBUFS)
        self.assertEqual(result.completed_sockets, 2)
        self.assertEqual(result.total_attempted, 8)
        self.assertEqual(result.packets_sent, 8)

    def test_failure_mid_socket_keeps_partial_sends(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1', count=4, nsockets=3)
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            net.rds_sockets[1].fail_send_after = 1
            with self.assertLogs(level='ERROR'):
                result = ProbeScheduler(conf).run(group)
        # then
        self.assertEqual([it.sent for it in result.samples], [4, 1, 0])
        self.assertEqual(result.failure.sent, 1)
        self.assertEqual(result.total_attempted, 4)
        self.assertEqual(result.packets_sent, 5)

    def test_spins_after_each_socket(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1', count=2, spin=True)
        spinner = DrainSpinner(ioctl=FakeIoctl(pending=[64, 0, 0]))
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            result = ProbeScheduler(conf, spinner).run(group)
        # then
        self.assertEqual([it.spins for it in result.spin_samples], [2, 1])
        self.assertTrue(all(it.outcome is SpinOutcome.DRAINED for it in result.spin_samples))

    def test_records_last_sent_timestamp(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1')
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            ProbeScheduler(conf, clock=lambda: 42.0).run(group)
            stamps = [it.last_sent_ts for it in group]
        # then
        self.assertEqual(stamps, [42.0] * 8)

    def test_count_of_one_clamps_group_to_one_socket(self):
        conf = RunConfig.from_options('127.0.0.1', count=1)
        self.assertEqual(conf.nsockets, 1)

    def test_unusable_address_on_send_stops_run(self):
        # given
        net = FakeNetwork()
        conf = RunConfig.from_options('127.0.0.1', nsockets=3)
        # when
        with ProbeGroup(given_factory(conf, net), conf.nsockets) as group:
            net.rds_sockets[1].sendto = mock.Mock(side_effect=TypeError('AF_INET address must be a pair'))
            with self.assertLogs(level='ERROR'):
                result = ProbeScheduler(conf).run(group)
        # then
        self.assertEqual([it.sent for it in result.samples], [1, 0, 0])
        self.assertEqual(result.failure.slot, 1)
        self.assertEqual(result.failure.errno, 0)
