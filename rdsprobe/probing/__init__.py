from .factory import SocketFactory
from .group import ProbeGroup
from .scheduler import ProbeScheduler
from .spinner import DrainSpinner
from .timing import TimingReporter

"""
The probing engine: socket group lifecycle, sequential send scheduling, drain spin and timing.
"""
