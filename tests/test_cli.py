from randomart.cli import main


def test_generation_failure_returns_error(tmp_path, capsys):
    output = tmp_path / "out.png"
    status = main(["--depth", "1", "--seed", "0", "--output", str(output),
                   "--width", "4", "--height", "4"])
    assert status == 1
    assert not output.exists()
    assert "ERROR" in capsys.readouterr().err


def test_bad_dimensions(tmp_path):
    output = tmp_path / "out.png"
    assert main(["--width", "0", "--output", str(output)]) == 1
    assert not output.exists()


def test_successful_run_writes_png(tmp_path, capsys):
    output = tmp_path / "art.png"
    status = 1
    for seed in range(20):
        status = main(["--depth", "10", "--seed", str(seed), "--output", str(output),
                       "--width", "4", "--height", "3"])
        if status == 0:
            break
    assert status == 0
    data = output.read_bytes()
    assert data[:8] == bytes((137, 80, 78, 71, 13, 10, 26, 10))
    assert data[12:16] == b"IHDR"
    assert int.from_bytes(data[16:20], "big") == 4
    assert int.from_bytes(data[20:24], "big") == 3
    captured = capsys.readouterr()
    assert captured.out.strip().splitlines()[-1].startswith("(")
    assert f"Generated {output}" in captured.err


def test_unwritable_output(tmp_path, capsys):
    output = tmp_path / "missing" / "art.png"
    statuses = [
        main(["--depth", "10", "--seed", str(seed), "--output", str(output),
              "--width", "2", "--height", "2"])
        for seed in range(5)
    ]
    assert statuses == [1] * 5
    assert not output.exists()