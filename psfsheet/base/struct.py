"""
psfsheet.base.struct - binary structures

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from types import SimpleNamespace
from functools import partial


class StructError(ValueError):
    pass


##############################################################################
# binary structs

# type strings and their size in bytes
TYPES = {
    'uint32': 4,
}


class StructValue(SimpleNamespace):
    """Decoded structure; fields are attributes."""

    _type = None

    def __repr__(self):
        return type(self).__name__ + '({})'.format(
            ', '.join(
                '{}={}'.format(_fld, _val)
                for _fld, _val in vars(self).items()
            )
        )

    def __bytes__(self):
        return self._type.to_bytes(self)


class StructType:
    """
    Represent a structured type of unsigned integer fields.

    mystruct = StructType('little', first='uint32', second='uint32')
    s = mystruct(first=1, second=2)

    assert bytes(s) == b'\1\0\0\0\2\0\0\0'
    assert mystruct.from_bytes(bytes(s)) == s
    """

    def __init__(self, endian, /, **description):
        """Create a structured type."""
        if endian[:1].lower() in ('b', '>'):
            self._byteorder = 'big'
        elif endian[:1].lower() in ('l', '<'):
            self._byteorder = 'little'
        else:
            raise ValueError(f"Endianness '{endian}' not recognised.")
        self._fields = {}
        offset = 0
        for field, fieldtype in description.items():
            try:
                size = TYPES[fieldtype]
            except KeyError:
                raise ValueError(
                    'Field type `{}` not understood'.format(fieldtype)
                ) from None
            self._fields[field] = (offset, size)
            offset += size
        self._size = offset
        # value class that can find its way back to this type
        self._value_cls = type('_Struct', (StructValue,), {'_type': self})

    @property
    def size(self):
        """Size in bytes of the structure."""
        return self._size

    def __call__(self, **kwargs):
        """Instantiate a struct variable; unspecified fields are zero."""
        values = dict.fromkeys(self._fields, 0)
        for field, value in kwargs.items():
            if field not in self._fields:
                raise StructError(f'No field `{field}` in structure.')
            values[field] = value
        return self._value_cls(**values)

    def from_bytes(self, buffer):
        """Decode struct from bytes."""
        data = bytes(buffer[:self._size])
        if len(data) < self._size:
            raise StructError(
                f'Buffer too small: need {self._size} bytes, got {len(data)}.'
            )
        return self._value_cls(**{
            _field: int.from_bytes(data[_start:_start+_size], self._byteorder)
            for _field, (_start, _size) in self._fields.items()
        })

    def to_bytes(self, value):
        """Encode struct value to bytes."""
        return b''.join(
            int(getattr(value, _field)).to_bytes(_size, self._byteorder)
            for _field, (_, _size) in self._fields.items()
        )


little_endian = SimpleNamespace(
    Struct=partial(StructType, '<'),
)
