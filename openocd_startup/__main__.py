import sys

from openocd_startup.cli.main import main


sys.exit(main())
