# gallery3d/serializers.py

from rest_framework import serializers


class Vec3Serializer(serializers.Serializer):
    x = serializers.FloatField()
    y = serializers.FloatField()
    z = serializers.FloatField()


class CameraSerializer(serializers.Serializer):
    position = Vec3Serializer(required=False)
    yaw = serializers.FloatField(required=False, default=0.0)
    pitch = serializers.FloatField(required=False, default=0.0)
    fov = serializers.FloatField(required=False, default=75.0, min_value=1.0, max_value=179.0)


class PickRequestSerializer(serializers.Serializer):
    camera = CameraSerializer(required=False, default=dict)
    ndc_x = serializers.FloatField(min_value=-1.0, max_value=1.0)
    ndc_y = serializers.FloatField(min_value=-1.0, max_value=1.0)
    aspect = serializers.FloatField(min_value=0.01)
    query = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False, default=dict)


class StepRequestSerializer(serializers.Serializer):
    camera = CameraSerializer(required=False, default=dict)
    keys = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    dt = serializers.FloatField(min_value=0.0)
    mouse_dx = serializers.FloatField(required=False, default=0.0)
    mouse_dy = serializers.FloatField(required=False, default=0.0)
