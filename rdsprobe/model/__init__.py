from .endpoint import Endpoint
from .exception import *
from .probesocket import ProbeSocket
from .runresult import RunResult, SocketSample
from .spinresult import SpinOutcome, SpinResult

"""
Defines shared model classes over all layers.
"""
