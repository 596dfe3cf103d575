from finyl.usb import list_mounted_usb_paths

MOUNTS = """\
proc /proc proc rw,nosuid 0 0
/dev/nvme0n1p2 / ext4 rw,relatime 0 0
/dev/sdb1 /run/media/user/STICK vfat rw,nosuid 0 0
tmpfs /tmp tmpfs rw 0 0
/dev/usb0 /mnt/usb vfat rw 0 0
/dev/sdc1 /mnt/last
"""


def test_lists_usb_mount_points(tmp_path):
    mounts = tmp_path / "mounts"
    mounts.write_text(MOUNTS)
    assert list_mounted_usb_paths(mounts) == [
        "/run/media/user/STICK",
        "/mnt/usb",
        "/mnt/last",
    ]


def test_no_usb_devices(tmp_path):
    mounts = tmp_path / "mounts"
    mounts.write_text("proc /proc proc rw 0 0\n/dev/nvme0n1p1 /boot vfat rw 0 0\n")
    assert list_mounted_usb_paths(mounts) == []


def test_line_without_space_is_skipped(tmp_path):
    mounts = tmp_path / "mounts"
    mounts.write_text("/dev/sda1\n/dev/sda2 /data ext4 rw 0 0\n")
    assert list_mounted_usb_paths(mounts) == ["/data"]


def test_missing_mount_table_gives_empty_list(tmp_path):
    assert list_mounted_usb_paths(tmp_path / "absent") == []