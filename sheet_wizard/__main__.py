import sys

from sheet_wizard.main import main

sys.exit(main())
