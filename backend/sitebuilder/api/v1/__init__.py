from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import health
from . import pages
from . import home
from . import layout
from . import submissions
from . import audit
from . import public
from . import posts
from . import settings
