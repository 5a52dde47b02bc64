from .sorter import verify_sorted, sort_points, count_out_of_order
