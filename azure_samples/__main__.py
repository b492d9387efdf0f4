import sys

from azure_samples.main import main

sys.exit(main())
