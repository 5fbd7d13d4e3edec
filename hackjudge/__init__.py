"""黑客松评审计分引擎"""

__version__ = "1.0.0"
