import sys

from structured_classifier.main import main

sys.exit(main())
