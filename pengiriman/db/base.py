from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Every model names its table explicitly with __tablename__.
    pass
