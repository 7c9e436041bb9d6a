import contextlib
import io
from unittest import TestCase, mock

from rdsprobe import run as entry
from rdsprobe.probing import DrainSpinner, SocketFactory
from .fakes import FakeIoctl, FakeNetwork


class TestMain(TestCase):
    def setUp(self):
        self.net = FakeNetwork(local=('127.0.0.1', 40000))
        self.ioctl = FakeIoctl(pending=[0])
        factory_patch = mock.patch(
            'rdsprobe.bootstrap.wiring.SocketFactory',
            side_effect=lambda conf: SocketFactory(conf, open_socket=self.net, ioctl=self.ioctl)
        )
        spinner_ioctl_patch = mock.patch(
            'rdsprobe.bootstrap.wiring.DrainSpinner', side_effect=lambda: DrainSpinner(ioctl=self.ioctl)
        )
        netifaces_patch = mock.patch('rdsprobe.libtools.network.netifaces')
        for patch in (factory_patch, spinner_ioctl_patch, netifaces_patch):
            patch.start()
            self.addCleanup(patch.stop)

    def _main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                entry.main(argv)
        return ctx.exception.code, out.getvalue(), err.getvalue()

    def test_default_group(self):
        # when
        code, out, _ = self._main(['-q', '127.0.0.1'])
        # then
        self.assertEqual(code, 0)
        self.assertEqual(len(self.net.rds_sockets), 8)
        self.assertTrue(all(len(it.sent) == 1 for it in self.net.rds_sockets))
        self.assertTrue(all(it.closed for it in self.net.rds_sockets))
        self.assertIn('8 sockets took', out)
        self.assertIn('for 8 packets', out)

    def test_family_mismatch_creates_no_socket(self):
        # when
        code, _, err = self._main(['-q', '-I', '127.0.0.1', '::1'])
        # then
        self.assertEqual(code, 1)
        self.assertEqual(self.net.created, [])
        self.assertIn('family are not the same', err)

    def test_clamped_group(self):
        # when
        code, out, _ = self._main(['-q', '-c', '2', '127.0.0.1'])
        # then
        self.assertEqual(code, 0)
        self.assertEqual(len(self.net.rds_sockets), 2)
        self.assertIn('2 sockets took', out)
        self.assertIn('for 4 packets', out)

    def test_spin_prints_count_per_socket(self):
        # when
        code, out, _ = self._main(['-q', '-s', '-n', '2', '127.0.0.1'])
        # then
        self.assertEqual(code, 0)
        self.assertIn('Spun for 1 counts on socket 0', out)
        self.assertIn('Spun for 1 counts on socket 1', out)
        self.assertNotIn('Socket', out)

    def test_aborted_run_reports_and_fails(self):
        # given
        create_socket = FakeNetwork.__call__

        def failing_third(net, family, type_, proto=0):
            sock = create_socket(net, family, type_, proto)
            if len(net.rds_sockets) == 3 and sock in net.rds_sockets:
                sock.fail_send_after = 0
            return sock

        # when
        with mock.patch.object(FakeNetwork, '__call__', failing_third):
            code, out, _ = self._main(['-q', '127.0.0.1'])
        # then
        self.assertEqual(code, 1)
        self.assertEqual([len(it.sent) for it in self.net.rds_sockets], [1, 1, 0, 0, 0, 0, 0, 0])
        self.assertIn('for 2 packets', out)
        self.assertIn('Run aborted on socket 2', out)

    def test_socket_setup_failure_is_fatal(self):
        # given
        self.net.fail_rds_after = 0
        # when
        code, out, err = self._main(['-q', '127.0.0.1'])
        # then
        self.assertEqual(code, 1)
        self.assertIn('unable to create RDS socket', err)
        self.assertNotIn('sockets took', out)

    def test_ipv6_run_fails_as_bind_error(self):
        # given
        self.net.local = ('::1', 40000, 0, 0)
        # when
        code, out, err = self._main(['-q', '::1'])
        # then
        self.assertEqual(code, 1)
        self.assertIn('RDS over IPv6 is not supported', err)
        self.assertNotIn('Unexpected exception', out + err)
        self.assertTrue(all(it.closed for it in self.net.rds_sockets))
