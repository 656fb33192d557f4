from flask import render_template

from ..chat.forms import CharacterForm
from . import bp


@bp.route("/")
def index():
    return render_template("main/index.html", form=CharacterForm())
