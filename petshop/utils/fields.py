# petshop/utils/fields.py
from bson import ObjectId
from marshmallow import fields

from .mongo_utils import is_object_id


class ObjectIdField(fields.Field):
    """
    24자리 16진수 문자열 <-> ObjectId 변환 필드.
    load 시 ObjectId를, dump 시 문자열을 돌려줍니다.
    """
    default_error_messages = {"invalid": "Invalid ID format"}

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return str(value)

    def _deserialize(self, value, attr, data, **kwargs):
        if not is_object_id(value):
            raise self.make_error("invalid")
        return ObjectId(value)
