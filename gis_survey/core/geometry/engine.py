"""
GeometryEngine facade.

Groups every geometry function as a static method so callers can depend on
a single object (or substitute their own engine in tests).
"""

from . import measure, path, polygon, shapes


class GeometryEngine:
    """Stateless library of geodesic algorithms on coordinates."""

    # Measurement
    calculate_distance = staticmethod(measure.calculate_distance)
    calculate_bearing = staticmethod(measure.calculate_bearing)
    destination_coordinate = staticmethod(measure.destination_coordinate)
    calculate_destination_point = staticmethod(measure.calculate_destination_point)
    calculate_perimeter = staticmethod(measure.calculate_perimeter)
    calculate_path_length = staticmethod(measure.calculate_path_length)
    calculate_elevation_gain = staticmethod(measure.calculate_elevation_gain)
    calculate_elevation_loss = staticmethod(measure.calculate_elevation_loss)
    create_elevation_profile = staticmethod(measure.create_elevation_profile)

    # Polygons
    calculate_area = staticmethod(polygon.calculate_area)
    calculate_centroid = staticmethod(polygon.calculate_centroid)
    calculate_polygon_centroid = staticmethod(polygon.calculate_polygon_centroid)
    calculate_volume = staticmethod(polygon.calculate_volume)
    calculate_polygon_volume = staticmethod(polygon.calculate_polygon_volume)
    has_self_intersections = staticmethod(polygon.has_self_intersections)
    is_point_in_polygon = staticmethod(polygon.is_point_in_polygon)
    point_in_polygon = staticmethod(polygon.point_in_polygon)

    # Paths
    nearest_point_on_segment = staticmethod(path.nearest_point_on_segment)
    calculate_nearest_point_on_path = staticmethod(path.calculate_nearest_point_on_path)
    calculate_path_center = staticmethod(path.calculate_path_center)
    get_point_at_distance = staticmethod(path.get_point_at_distance)
    create_regular_points_along_path = staticmethod(path.create_regular_points_along_path)
    simplify_path = staticmethod(path.simplify_path)
    do_paths_intersect = staticmethod(path.do_paths_intersect)

    # Shapes
    create_offset_line = staticmethod(shapes.create_offset_line)
    calculate_perpendicular_offset = staticmethod(shapes.calculate_perpendicular_offset)
    create_arc = staticmethod(shapes.create_arc)
    create_circle = staticmethod(shapes.create_circle)
    create_rectangle = staticmethod(shapes.create_rectangle)
