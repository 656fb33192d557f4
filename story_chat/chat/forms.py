from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional


class CharacterForm(FlaskForm):
    name = StringField(
        "Name",
        validators=[DataRequired(message="Add a character name before starting."), Length(max=120)],
    )
    description = TextAreaField("Description", validators=[Optional(), Length(max=2000)])
    personality = TextAreaField("Personality", validators=[Optional(), Length(max=2000)])
    submit = SubmitField("Create character")
