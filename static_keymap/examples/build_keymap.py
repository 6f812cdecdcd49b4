# ==================================================
# examples/build_keymap.py
# ==================================================
import argparse
from static_keymap import pack_records, write_keymap, open_keymap

def main():
    p = argparse.ArgumentParser()
    p.add_argument("keymap", help="path to keymap file")
    p.add_argument("count", type=int)
    p.add_argument("--compress", action="store_true", help="zstd-compress the file")
    args = p.parse_args()

    blob = pack_records((i, i * 10, i * 20) for i in range(args.count))
    write_keymap(args.keymap, blob, compressed=args.compress)

    table = open_keymap(args.keymap)
    print(f"{args.keymap}: {len(table)} records")

if __name__ == "__main__":
    main()
