# /app/db/base.py

# Central registry for the SQLAlchemy models. Importing them here guarantees
# that `Base.metadata` knows about every table before `create_all` runs.

from .base_class import Base

from .models.class_student_models import Class, Student
