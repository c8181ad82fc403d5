"""
Disposable map overlays.

Each Folium element drawn by a page is wrapped in an ``OverlayHandle`` and
owned by exactly one ``OverlayGroup``. The group detaches everything it owns
when disposed, including when the page body raises.
"""
import logging

import folium

logger = logging.getLogger(__name__)


class OverlayHandle:
    def __init__(self, element):
        self.element = element
        self._map = None

    @property
    def attached(self):
        return self._map is not None

    def attach(self, m):
        if self._map is m:
            return self
        if self._map is not None:
            self.detach()
        self.element.add_to(m)
        self._map = m
        return self

    def detach(self):
        if self._map is None:
            return
        self._map._children.pop(self.element.get_name(), None)
        self._map = None


class OverlayGroup:
    def __init__(self, m=None):
        self.map = m
        self._handles = []

    def __len__(self):
        return len(self._handles)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False

    def add(self, element):
        handle = OverlayHandle(element)
        self._handles.append(handle)
        if self.map is not None:
            handle.attach(self.map)
        return handle

    def attach_all(self, m):
        self.map = m
        for handle in self._handles:
            handle.attach(m)

    def dispose(self):
        for handle in self._handles:
            handle.detach()
        if self._handles:
            logger.info(f"Disposed {len(self._handles)} overlays")
        self._handles = []


def device_marker(device, color="green"):
    lng, lat = device.position
    return folium.Marker(
        location=[lat, lng],
        tooltip=device.name,
        popup=f"{device.name} ({device.type}) - {device.coverage_range} km",
        icon=folium.Icon(color=color),
    )


def coverage_circle(lat, lng, radius_km, label=None, color="#06b6d4"):
    return folium.Circle(
        location=[lat, lng],
        radius=radius_km * 1000,
        color=color,
        weight=1,
        fill=True,
        fill_opacity=0.15,
        tooltip=label,
    )


def boundary_polygon(vertices, tooltip=None, color="#06b6d4"):
    return folium.Polygon(
        locations=[[lat, lng] for lng, lat in vertices],
        color=color,
        weight=3,
        fill=True,
        fill_opacity=0.2,
        tooltip=tooltip,
    )


def area_rectangle(south, west, north, east, color="#f59e0b"):
    return folium.Rectangle(
        bounds=[[south, west], [north, east]],
        color=color,
        weight=2,
        fill=False,
        dash_array="6",
    )
