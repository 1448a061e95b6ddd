from __future__ import annotations

from dispatch.command import EXECUTOR_QUOTE_STYLE, QuoteStyle, build_command, quote_arg, uat_path

WIN_SUBPATH = "Engine/Build/BatchFiles/RunUAT.bat"
SH_SUBPATH = "Engine/Build/BatchFiles/RunUAT.sh"


def test_windows_single_wrap():
    cmd = build_command("C:/Epic/UE_5.3", ["BuildCookRun", "-project=Foo"], WIN_SUBPATH, platform="win32")
    assert cmd == '"C:/Epic/UE_5.3\\Engine\\Build\\BatchFiles\\RunUAT.bat" BuildCookRun -project=Foo'


def test_windows_double_wrap():
    cmd = build_command(
        "C:/Program Files/Epic Games/UE_5.3",
        ["BuildCookRun", "-project=C:/My Projects/Foo.uproject"],
        WIN_SUBPATH,
        style=QuoteStyle.DOUBLE,
        platform="win32",
    )
    assert cmd == (
        '""C:/Program Files/Epic Games/UE_5.3\\Engine\\Build\\BatchFiles\\RunUAT.bat" '
        'BuildCookRun "-project=C:/My Projects/Foo.uproject""'
    )


def test_posix_command_quotes_tokens():
    cmd = build_command("/opt/UE 5.3", ["BuildCookRun", "-project=/p/My Game.uproject", "-cook"], SH_SUBPATH, platform="linux")
    assert cmd == "'/opt/UE 5.3/Engine/Build/BatchFiles/RunUAT.sh' BuildCookRun '-project=/p/My Game.uproject' -cook"


def test_posix_exe_path_is_not_shell_expanded():
    cmd = build_command("/opt/$HOME/`id`", ["BuildCookRun"], SH_SUBPATH, platform="linux")
    assert cmd == "'/opt/$HOME/`id`/Engine/Build/BatchFiles/RunUAT.sh' BuildCookRun"


def test_double_wrap_is_windows_only():
    cmd = build_command("/opt/ue", ["BuildCookRun"], SH_SUBPATH, style=QuoteStyle.DOUBLE, platform="linux")
    assert cmd == "/opt/ue/Engine/Build/BatchFiles/RunUAT.sh BuildCookRun"


def test_uat_path_keeps_install_dir_verbatim():
    assert uat_path("C:\\Epic\\UE_5.3\\", WIN_SUBPATH, platform="win32") == "C:\\Epic\\UE_5.3\\Engine\\Build\\BatchFiles\\RunUAT.bat"
    assert uat_path("/opt/ue/", SH_SUBPATH, platform="darwin") == "/opt/ue/Engine/Build/BatchFiles/RunUAT.sh"


def test_shell_operators_pass_through_when_not_quoted_by_platform():
    # Windows 规则只给含空白/引号的参数加引号，& 之类原样交给 cmd.exe
    assert quote_arg("&&", platform="win32") == "&&"
    assert quote_arg('say "hi"', platform="win32") == '"say \\"hi\\""'
    assert quote_arg("", platform="win32") == '""'


def test_executor_quote_pairing():
    assert EXECUTOR_QUOTE_STYLE["subprocess"] is QuoteStyle.SINGLE
    assert EXECUTOR_QUOTE_STYLE["system"] is QuoteStyle.DOUBLE


def test_empty_tail_has_no_trailing_space():
    assert build_command("/ue", [], SH_SUBPATH, platform="linux") == "/ue/Engine/Build/BatchFiles/RunUAT.sh"
    assert build_command("C:/ue", [], WIN_SUBPATH, platform="win32") == '"C:/ue\\Engine\\Build\\BatchFiles\\RunUAT.bat"'
