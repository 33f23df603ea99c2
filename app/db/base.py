# app/db/base.py
from app.db.base_class import Base  # noqa: F401

# Importa todos los modelos que definen tablas para que queden en Base.metadata
# (Alembic autogenerate y create_all en tests dependen de esto).
from app.models import user  # noqa: F401
from app.models import questionnaire  # noqa: F401
from app.models import contact  # noqa: F401
from app.models import audit  # noqa: F401
