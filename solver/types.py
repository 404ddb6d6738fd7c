Grid = list[list[int]]
Position = tuple[int, int]
Candidate = tuple[Position, int]
TraceLog = list[str]
TraceStep = dict[str, object]
TourResult = dict[str, object]
ProgressState = dict[str, int]
