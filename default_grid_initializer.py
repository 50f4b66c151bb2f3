from grid_model import Grid


class DefaultGridInitializer:
    def create(self) -> Grid:
        cols = ["col_a", "col_b", "col_c"]
        return Grid.from_rows([cols] + [[""] * len(cols) for _ in range(3)])
