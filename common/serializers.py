"""
Shared serializer bases.
"""
from rest_framework import serializers


class StrictSerializer(serializers.Serializer):
    """
    Request serializer that rejects fields it does not declare.
    """

    def to_internal_value(self, data):
        if hasattr(data, 'keys'):
            unknown = sorted(set(data.keys()) - set(self.fields.keys()))
            if unknown:
                raise serializers.ValidationError(
                    {name: ['Unknown field.'] for name in unknown}
                )
        return super().to_internal_value(data)
