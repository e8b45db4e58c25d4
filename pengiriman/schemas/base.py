from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CamelSchema(BaseSchema):
    """
    Wire format of the grid and form clients: camelCase keys
    (`namaPengirim`, `tanggalKeberangkatan`). Python code may still
    populate fields by their snake_case names.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
