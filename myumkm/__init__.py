"""myumkm - session/identity and direct-messaging core of the UMKM business network."""

__version__ = "0.1.0"
