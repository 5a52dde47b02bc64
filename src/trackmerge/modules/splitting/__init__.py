from .by_day import split_by_day, day_of
from .by_size import split_by_size
