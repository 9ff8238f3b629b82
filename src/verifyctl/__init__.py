"""verifyctl - command line administration for IBM Security Verify tenants."""

__version__ = "0.1.0"
