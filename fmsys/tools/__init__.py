"""grep and wc tools, printf-style formatting, a PRNG, a shell parser, RISC-V and ELF helpers."""