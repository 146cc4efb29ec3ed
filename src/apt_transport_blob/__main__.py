"""Entry point for python -m apt_transport_blob."""
import sys

from apt_transport_blob.main import main

if __name__ == "__main__":
    sys.exit(main())
