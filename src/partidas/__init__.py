"""Record keeper for Brazilian football clubs, stadiums and matches."""

__version__ = "0.1.0"
