"""
Detection of the platform identifier used in engine file names,
e.g. `debian-openssl-1.1.x`, `darwin-arm64` or `windows`.
"""

from __future__ import annotations

import re
import sys
import asyncio
import logging
import platform as _platform
from pathlib import Path


__all__ = (
    'name',
    'arch',
    'binary_platform',
    'resolve_platform',
    'parse_distro',
    'parse_openssl_version',
    'parse_libssl_filename',
)

log: logging.Logger = logging.getLogger(__name__)

OS_RELEASE = Path('/etc/os-release')

LIBSSL_DIRECTORIES = (
    Path('/lib'),
    Path('/lib64'),
    Path('/usr/lib'),
    Path('/usr/lib64'),
    Path('/lib/x86_64-linux-gnu'),
    Path('/usr/lib/x86_64-linux-gnu'),
    Path('/lib/aarch64-linux-gnu'),
    Path('/usr/lib/aarch64-linux-gnu'),
)

DEFAULT_OPENSSL = '1.1.x'


def name() -> str:
    return _platform.system().lower()


def arch() -> str:
    machine = _platform.machine().lower()
    if machine in {'aarch64', 'arm64'}:
        return 'arm64'
    if machine.startswith('arm'):
        return 'arm'
    if machine in {'amd64', 'x86_64'}:
        return 'x64'
    return machine


def parse_distro(os_release: str) -> str | None:
    """Map the contents of `/etc/os-release` to the distro family used by the engines"""
    match = re.search(r'^ID="?([^"\n]*)"?$', os_release, re.MULTILINE | re.IGNORECASE)
    distro_id = match.group(1).lower() if match else ''

    match = re.search(r'^ID_LIKE="?([^"\n]*)"?$', os_release, re.MULTILINE | re.IGNORECASE)
    distro_id_like = match.group(1).lower() if match else ''

    if distro_id == 'alpine':
        return 'musl'

    if distro_id == 'raspbian':
        return 'arm'

    if distro_id == 'nixos':
        return 'nixos'

    if distro_id == 'fedora' or any(
        distro in distro_id_like for distro in ('centos', 'fedora', 'rhel')
    ):
        return 'rhel'

    if distro_id == 'debian' or any(distro in distro_id_like for distro in ('debian', 'ubuntu')):
        return 'debian'

    return None


def parse_openssl_version(string: str) -> str | None:
    match = re.match(r'^OpenSSL\s(\d+\.\d+)\.\d+', string)
    if match is None:
        return None

    return match.group(1) + '.x'


def parse_libssl_filename(filename: str) -> str | None:
    match = re.match(r'^libssl\.so\.(\d+)(?:\.(\d+))?', filename)
    if match is None:
        return None

    major, minor = match.group(1), match.group(2)
    return f'{major}.{minor or "0"}.x'


def resolve_platform(
    system: str,
    machine: str,
    *,
    distro: str | None = None,
    libssl: str | None = None,
    release: str = '',
) -> str:
    """Combine the detected OS details into the engine platform identifier"""
    if system == 'darwin':
        return 'darwin-arm64' if machine == 'arm64' else 'darwin'

    if system == 'windows':
        return 'windows'

    if system == 'freebsd':
        return f'freebsd{release.split(".")[0]}'

    if system in {'openbsd', 'netbsd'}:
        return system

    if system != 'linux':
        log.warning('Prisma detected unknown OS "%s" and may not work as expected', system)

    if distro == 'nixos':
        return 'linux-nixos'

    if machine == 'arm64':
        return f'linux-arm64-openssl-{libssl or DEFAULT_OPENSSL}'

    if machine == 'arm':
        return f'linux-arm-openssl-{libssl or DEFAULT_OPENSSL}'

    if distro == 'musl':
        return 'linux-musl'

    if distro and libssl:
        return f'{distro}-openssl-{libssl}'

    if libssl:
        return f'debian-openssl-{libssl}'

    if distro:
        return f'{distro}-openssl-{DEFAULT_OPENSSL}'

    return f'debian-openssl-{DEFAULT_OPENSSL}'


async def get_distro() -> str | None:
    try:
        contents = await asyncio.to_thread(OS_RELEASE.read_text, 'utf-8')
    except OSError as exc:
        log.debug('Could not read %s: %s', OS_RELEASE, exc)
        return None

    return parse_distro(contents)


async def get_openssl() -> str | None:
    try:
        process = await asyncio.create_subprocess_exec(
            'openssl',
            'version',
            '-v',
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, _ = await process.communicate()
    except OSError as exc:
        log.debug('Could not run openssl: %s', exc)
    else:
        if process.returncode == 0:
            version = parse_openssl_version(str(stdout, sys.getdefaultencoding()))
            if version is not None:
                return version

    return await asyncio.to_thread(_find_libssl)


def _find_libssl() -> str | None:
    for directory in LIBSSL_DIRECTORIES:
        if not directory.is_dir():
            continue

        for path in sorted(directory.glob('libssl.so.*')):
            version = parse_libssl_filename(path.name)
            if version is not None:
                log.debug('Found libssl %s at %s', version, path)
                return version

    return None


async def binary_platform() -> str:
    system = name()
    machine = arch()
    if system != 'linux':
        return resolve_platform(system, machine, release=_platform.release())

    distro, libssl = await asyncio.gather(get_distro(), get_openssl())
    return resolve_platform(system, machine, distro=distro, libssl=libssl)
