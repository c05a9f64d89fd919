from app.utils.base.enums import BaseEnum, AccessLevel
