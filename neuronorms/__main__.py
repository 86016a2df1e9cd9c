import sys

from neuronorms.cli import main

sys.exit(main())
