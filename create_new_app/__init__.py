"""create-new-app -- generate a React + Webpack project from the command line.

Optional addons: Redux, Redux First Router, an Express API server and MongoDB.
"""

__version__ = "0.1.0"
