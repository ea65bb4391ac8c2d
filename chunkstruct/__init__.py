"""
# Chunkstruct: chunk based file formats for humans.

A file format is described declaratively: a Chunk is a class whose attributes
are Fields, each one knowing its own binary representation.

Two basic main operations are defined for the file format and its sub components:

 1. unpack(): the more straightforward, i.e., reading the binary data
    and build a high-level representation of that.
    The chunk itself knows how many bytes needs to read
    to finalize the representation, possibly looking at other fields
    (see properties.Dependency).

 2. pack(): encode the high-level representation into binary data;
    fields derived from other fields (lengths, checksums) are updated
    while packing.

When unpacking fails the exception raised carries the chain of the fields
it crossed, so that is possible to tell where the data is broken.
"""
