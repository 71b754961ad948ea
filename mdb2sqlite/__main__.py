import sys

from mdb2sqlite.mdb_to_sqlite import main

sys.exit(main())
