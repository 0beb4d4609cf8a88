import sys

from whatsapp_email.server.main import main

sys.exit(main())
