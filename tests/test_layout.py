from stair_blocks.visualization.renderer import BoardLayout


def test_slots_stack_upwards():
    layout = BoardLayout(3, cell_size=40, gap=8, margin=20)
    low = layout.slot_rect(3, 0)
    high = layout.slot_rect(3, 2)
    assert low.bottom == layout.baseline
    assert high.top == layout.margin
    assert high.top < low.top


def test_hit_slot():
    layout = BoardLayout(3, cell_size=40, gap=8, margin=20)
    for column in (1, 2, 3):
        for row in range(column):
            assert layout.hit_slot(layout.slot_rect(column, row).center) == (column, row)
    # above column 1 there is no slot
    assert layout.hit_slot((layout.column_x(1) + 5, layout.margin + 5)) is None
    assert layout.hit_slot((0, 0)) is None


def test_span_rect_covers_rows():
    layout = BoardLayout(4)
    span = layout.span_rect(4, 1, 2)
    assert span.bottom == layout.slot_rect(4, 1).bottom
    assert span.top == layout.slot_rect(4, 2).top


def test_tray_hit():
    layout = BoardLayout(3)
    rects = dict(layout.tray_rects([2, 1, 3]))
    assert layout.hit_tray(rects[3].center, [2, 1, 3]) == 3
    assert layout.hit_tray((0, 0), [2, 1, 3]) is None
