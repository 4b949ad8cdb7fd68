# CPU side of the VM: register file, call stack, ALU, decoder
