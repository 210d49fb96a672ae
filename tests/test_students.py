import pytest

from consoleapps.students import (
    RECORD_SIZE,
    DuplicateStudentError,
    InvalidRollError,
    StoreFullError,
    Student,
    StudentError,
    StudentStore,
    decode_records,
    encode_record,
    format_table,
    is_valid_roll,
    main,
)

ANN = Student("Ann", "Lee", "AM00001")
BOB = Student("Bob", "Lee", "AM00002")
CAT = Student("Cat", "Ray", "AM00003")


@pytest.fixture
def store(tmp_path):
    return StudentStore(tmp_path / "students.dat")


@pytest.mark.parametrize("roll", ["AM12345", "AM00000", "AM99999"])
def test_valid_rolls(roll):
    assert is_valid_roll(roll) is True


@pytest.mark.parametrize("roll", ["AM1234", "AM123456", "am12345", "AX12345", "AM1234x", ""])
def test_invalid_rolls(roll):
    assert is_valid_roll(roll) is False


def test_encode_record_is_fixed_size_and_nul_padded():
    record = encode_record(ANN)
    assert len(record) == RECORD_SIZE
    assert record[:4] == b"Ann\x00"


def test_record_round_trip():
    data = encode_record(ANN) + encode_record(BOB)
    assert decode_records(data) == [ANN, BOB]


def test_decode_ignores_trailing_partial_record():
    assert decode_records(encode_record(ANN) + b"xx") == [ANN]


def test_encode_rejects_overlong_field():
    with pytest.raises(StudentError):
        encode_record(Student("A" * 60, "Lee", "AM00001"))


def test_format_table_layout():
    lines = format_table([ANN, BOB]).splitlines()
    assert lines[0].split() == ["No", "First", "Name", "Last", "Name", "Roll"]
    assert lines[1] == "-" * 63
    assert lines[2].split() == ["1", "Ann", "Lee", "AM00001"]
    assert lines[3].split() == ["2", "Bob", "Lee", "AM00002"]


def test_format_table_empty_has_only_header():
    assert len(format_table([]).splitlines()) == 2


def test_empty_store_has_no_students(store):
    assert store.students() == []


def test_add_and_list(store):
    store.add(ANN)
    store.add(BOB)
    assert store.students() == [ANN, BOB]


def test_records_persist_across_stores(store):
    store.add(ANN)
    assert StudentStore(store.path).students() == [ANN]


def test_add_rejects_invalid_roll(store):
    with pytest.raises(InvalidRollError):
        store.add(Student("Ann", "Lee", "AM1"))
    assert store.students() == []


def test_add_rejects_duplicate_even_from_new_store(store):
    store.add(ANN)
    with pytest.raises(DuplicateStudentError):
        StudentStore(store.path).add(Student("Other", "Name", ANN.roll))
    assert store.students() == [ANN]


def test_capacity_limits_additions(tmp_path):
    limited = StudentStore(tmp_path / "s.dat", capacity=1)
    limited.add(ANN)
    with pytest.raises(StoreFullError):
        limited.add(BOB)
    assert limited.students() == [ANN]


def test_find_by_roll(store):
    store.add(ANN)
    store.add(BOB)
    assert store.find_by_roll(BOB.roll) == BOB
    assert store.find_by_roll("AM99999") is None


def test_find_by_last_name(store):
    for s in (ANN, BOB, CAT):
        store.add(s)
    assert store.find_by_last_name("Lee") == [ANN, BOB]
    assert store.find_by_last_name("Nobody") == []


def test_delete(store):
    for s in (ANN, BOB, CAT):
        store.add(s)
    assert store.delete(BOB.roll) is True
    assert store.students() == [ANN, CAT]
    assert store.delete(BOB.roll) is False
    assert store.students() == [ANN, CAT]


def test_delete_without_file(store):
    with pytest.raises(StudentError):
        store.delete(ANN.roll)


def test_export_csv(store, tmp_path):
    store.add(ANN)
    store.add(CAT)
    target = tmp_path / "out.csv"
    assert store.export_csv(target) == 2
    assert target.read_text(encoding="utf-8").splitlines() == [
        "Roll,First Name,Last Name",
        "AM00001,Ann,Lee",
        "AM00003,Cat,Ray",
    ]


def test_export_csv_without_file(store, tmp_path):
    with pytest.raises(StudentError):
        store.export_csv(tmp_path / "out.csv")


def test_main_adds_and_exits(tmp_path, monkeypatch, capsys):
    path = tmp_path / "students.dat"
    answers = iter(["1", "Ann", "Lee", "AM00001", "1", "Dup", "Dup", "AM00001", "5"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    assert main(["--file", str(path)]) == 0
    out = capsys.readouterr().out
    assert StudentStore(path).students() == [ANN]
    assert " Student added successfully!" in out
    assert "already exists. Cannot add duplicate." in out
    assert out.rstrip().endswith("Exiting...")