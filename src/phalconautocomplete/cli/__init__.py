"""
Command-line entry points for phalconautocomplete.
"""

import logging

# Keep HTTP connection chatter out of the progress log
logging.getLogger('urllib3').setLevel(logging.WARNING)
